"""Shared fixtures: small municipal extracts written as CSV."""

from pathlib import Path

import pytest

from civicprofile.core.config import ReportConfig

BUILDING_CSV = """\
ID,VIOLATION DATE,VIOLATION LAST MODIFIED DATE,VIOLATION DESCRIPTION,LONGITUDE,LATITUDE
1,01/15/2022,02/01/2022,ARRANGE PREMISE INSPECTION,-87.61,41.80
2,03/02/2023,03/10/2023,ARRANGE PREMISE INSPECTION,-87.62,41.81
3,07/19/2023,,REPAIR EXTERIOR WALL,-87.63,
4,11/30/2023,12/01/2023,ARRANGE PREMISE INSPECTION,,41.83
5,,,,-87.65,41.84
6,05/05/2023,05/06/2023,REPAIR EXTERIOR WALL,-87.66,41.85
"""

ORDINANCE_CSV = """\
ID,VIOLATION DATE,VIOLATION LAST MODIFIED DATE,HEARING DATE,VIOLATION ORDINANCE,LONGITUDE,LATITUDE
1,02/10/2021,02/11/2021,04/01/2021,Failed to maintain exterior walls,-87.70,41.90
2,06/14/2022,06/15/2022,,Failed to remove weeds,-87.71,41.91
3,09/01/2022,09/02/2022,11/20/2022,Failed to maintain exterior walls,-87.72,41.92
"""

SERVICE_CSV = """\
SR_NUMBER,SR_TYPE,CREATED_DATE,LAST_MODIFIED_DATE,CLOSED_DATE,LONGITUDE,LATITUDE
SR1,311 INFORMATION ONLY CALL,01/02/2024 09:15:00 AM,01/02/2024 09:16:00 AM,01/02/2024 09:16:00 AM,,
SR2,Pothole in Street Complaint,01/03/2024 10:00:00 AM,01/05/2024 01:30:00 PM,,-87.60,41.88
SR3,311 INFORMATION ONLY CALL,12/30/2023 11:59:00 PM,12/30/2023 11:59:00 PM,12/30/2023 11:59:00 PM,,
SR4,Graffiti Removal Request,02/14/2024 08:00:00 AM,02/20/2024 08:00:00 AM,02/20/2024 08:00:00 AM,-87.61,41.89
SR5,Pothole in Street Complaint,06/01/2023 07:45:00 AM,06/03/2023 07:45:00 AM,06/03/2023 07:45:00 AM,-87.62,41.90
"""


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    (tmp_path / "building_violations.csv").write_text(BUILDING_CSV)
    (tmp_path / "ordinance_violations.csv").write_text(ORDINANCE_CSV)
    (tmp_path / "311_service_requests.csv").write_text(SERVICE_CSV)
    return tmp_path


@pytest.fixture
def config(data_dir: Path) -> ReportConfig:
    return ReportConfig(data_dir=data_dir)
