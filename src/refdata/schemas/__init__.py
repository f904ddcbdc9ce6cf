from .common import CamelModel, PaginationQuery, Page, CreatedRef, BulkReport

__all__ = ["CamelModel", "PaginationQuery", "Page", "CreatedRef", "BulkReport"]
