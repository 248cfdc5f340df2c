# Service layer exports
from civicprofile.services.display_service import DisplayService as DisplayService
from civicprofile.services.geo_service import latest_year as latest_year
from civicprofile.services.geo_service import (
    latest_year_points as latest_year_points,
)
from civicprofile.services.geo_service import (
    points_per_category as points_per_category,
)
from civicprofile.services.profile_service import (
    TabularProfiler as TabularProfiler,
)
from civicprofile.services.profile_service import (
    exclude_labels as exclude_labels,
)
from civicprofile.services.profile_service import (
    label_contains as label_contains,
)

__all__ = [
    "DisplayService",
    "TabularProfiler",
    "exclude_labels",
    "label_contains",
    "latest_year",
    "latest_year_points",
    "points_per_category",
]
