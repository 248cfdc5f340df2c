# Public API exports
from civicprofile.core.config import ReportConfig as ReportConfig
from civicprofile.core.config import SourceConfig as SourceConfig
from civicprofile.core.models import NOT_APPLICABLE as NOT_APPLICABLE
from civicprofile.core.models import DatasetReport as DatasetReport
from civicprofile.core.validation import EmptyInputError as EmptyInputError
from civicprofile.core.validation import SchemaError as SchemaError
from civicprofile.datasets import Dataset as Dataset
from civicprofile.managers import ReportManager as ReportManager
from civicprofile.services import TabularProfiler as TabularProfiler

__all__ = [
    "NOT_APPLICABLE",
    "Dataset",
    "DatasetReport",
    "EmptyInputError",
    "ReportConfig",
    "ReportManager",
    "SchemaError",
    "SourceConfig",
    "TabularProfiler",
]
