# Core module exports
from civicprofile.core.models import NOT_APPLICABLE as NOT_APPLICABLE
from civicprofile.core.models import ColumnProfile as ColumnProfile
from civicprofile.core.models import DatasetReport as DatasetReport
from civicprofile.core.models import DateRange as DateRange
from civicprofile.core.models import FrequencyEntry as FrequencyEntry
from civicprofile.core.models import MissingEntry as MissingEntry
from civicprofile.core.utils import (
    infer_type_label as infer_type_label,
)
from civicprofile.core.utils import (
    load_file as load_file,
)
from civicprofile.core.validation import (
    EmptyInputError as EmptyInputError,
)
from civicprofile.core.validation import (
    ProfileError as ProfileError,
)
from civicprofile.core.validation import (
    SchemaError as SchemaError,
)

__all__ = [
    "NOT_APPLICABLE",
    "ColumnProfile",
    "DateRange",
    "DatasetReport",
    "EmptyInputError",
    "FrequencyEntry",
    "MissingEntry",
    "ProfileError",
    "SchemaError",
    "infer_type_label",
    "load_file",
]
