"""Hatch build hook for bundling a prebuilt opencc_jieba_capi library into wheels."""

import importlib.util
import os
import sys
from pathlib import Path
from types import ModuleType

from hatchling.builders.hooks.plugin.interface import BuildHookInterface

CAPI_DIR_ENV = "OPENCC_JIEBA_CAPI_DIR"
NATIVE_MODULE = Path(__file__).resolve().parent.parent / "opencc_jieba" / "_native.py"


def load_native_module() -> ModuleType:
    """Load ``opencc_jieba._native`` by path, without importing the package."""
    spec = importlib.util.spec_from_file_location("_opencc_jieba_native", NATIVE_MODULE)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class NativeLibraryHook(BuildHookInterface):
    """Build hook that ships the native library inside the wheel when one is available.

    The native library is built elsewhere (it is an external component).
    Point ``OPENCC_JIEBA_CAPI_DIR`` at the directory holding it to produce a
    platform wheel; without it the wheel stays pure Python and the library is
    located at runtime via ``OPENCC_JIEBA_LIB`` or the system loader.
    """

    PLUGIN_NAME = "native-lib"

    def initialize(self, version: str, build_data: dict) -> None:
        """Add the native library to the wheel before packaging."""
        if self.target_name == "sdist":
            # Don't bundle binaries in the sdist
            return
        if version == "editable":
            self._log("Editable install; library is resolved at runtime")
            return

        capi_dir = os.environ.get(CAPI_DIR_ENV)
        if not capi_dir:
            self._log(f"{CAPI_DIR_ENV} not set; building pure-Python wheel")
            return

        lib_name = self._get_lib_name()
        lib_path = Path(capi_dir).expanduser().resolve() / lib_name
        if not lib_path.exists():
            raise RuntimeError(f"{CAPI_DIR_ENV} is set but {lib_path} does not exist")

        build_data.setdefault("force_include", {})[str(lib_path)] = f"opencc_jieba/{lib_name}"
        build_data["pure_python"] = False
        build_data["infer_tag"] = True
        self._log(f"Bundled {lib_name} ({lib_path.stat().st_size // 1024}KB)")

    def _get_lib_name(self) -> str:
        """Get platform-specific library name, as the runtime loader expects it."""
        return load_native_module().library_filename()

    def _log(self, msg: str) -> None:
        """Log build progress."""
        print(f"[native-lib] {msg}", file=sys.stderr)
