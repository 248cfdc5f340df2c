# Local imports
from civicprofile.datasets.dataset import Dataset

__all__ = ["Dataset"]
