"""
Python 3.10 import compatibility tests.

These tests verify that all opencc_jieba modules import on Python 3.10+
without the native library present: loading is deferred to first use.
"""

import os
import subprocess
import sys
from pathlib import Path


class TestImports:
    """Test that all opencc_jieba modules import successfully."""

    def test_import_package(self):
        """Import the main package."""
        import opencc_jieba

        assert opencc_jieba is not None

    def test_import_public_api(self):
        """Everything in __all__ is importable."""
        import opencc_jieba

        for name in opencc_jieba.__all__:
            assert getattr(opencc_jieba, name) is not None

    def test_import_core(self):
        """Import the core subpackage."""
        from opencc_jieba.core import OpenccJieba, WeightedKeyword

        assert OpenccJieba is not None
        assert WeightedKeyword is not None

    def test_import_internal_modules(self):
        """Import internal binding modules."""
        from opencc_jieba import _bindings, _codec, _logging, _marshal, _native, config

        for module in (_bindings, _codec, _logging, _marshal, _native, config):
            assert module is not None

    def test_import_does_not_load_library(self):
        """Importing never loads the shared library."""
        import opencc_jieba

        package_root = Path(opencc_jieba.__file__).resolve().parent.parent
        env = dict(os.environ, PYTHONPATH=str(package_root), OPENCC_JIEBA_LIB="/nonexistent.so")
        code = "import opencc_jieba, opencc_jieba._bindings as b; assert b._lib is None"

        result = subprocess.run([sys.executable, "-c", code], env=env, capture_output=True)

        assert result.returncode == 0, result.stderr.decode()


class TestPythonVersion:
    """Tests for Python version requirements."""

    def test_python_version_at_least_310(self):
        """Python version is at least 3.10."""
        assert sys.version_info >= (3, 10)
