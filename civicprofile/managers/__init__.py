# Local imports
from civicprofile.managers.manager import ReportManager, build_exclusion

__all__ = ["ReportManager", "build_exclusion"]
