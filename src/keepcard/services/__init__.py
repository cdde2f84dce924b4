from .extractor import InsufficientRowsError, NoQualifyingDataError, extract_items
from .generator import generate, generate_from_file
from .paginator import paginate

__all__ = [
    "InsufficientRowsError",
    "NoQualifyingDataError",
    "extract_items",
    "generate",
    "generate_from_file",
    "paginate",
]
