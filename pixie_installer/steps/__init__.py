from .step_10_preflight import PreflightStep
from .step_20_package_manager import PackageManagerStep
from .step_30_create_directories import CreateDirectoriesStep
from .step_40_fetch_repository import FetchRepositoryStep
from .step_50_install_packages import InstallPackagesStep
from .step_60_configure_apps import ConfigureAppsStep
from .step_90_finalize_reboot import FinalizeRebootStep

__all__ = [
    "PreflightStep",
    "PackageManagerStep",
    "CreateDirectoriesStep",
    "FetchRepositoryStep",
    "InstallPackagesStep",
    "ConfigureAppsStep",
    "FinalizeRebootStep",
]
