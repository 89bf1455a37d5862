from .check_package_indexed import CheckPackageIndexedUseCase
from .run_index_check import RunIndexCheckUseCase

__all__ = ["CheckPackageIndexedUseCase", "RunIndexCheckUseCase"]
