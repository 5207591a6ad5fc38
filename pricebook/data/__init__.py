"""Receipt records, normalization, reference catalogs and the in-memory snapshot store."""
from .schemas import Catalog, LineItem, PriceEntry, PriceStatistics, ProcessedItem, Receipt, Trend
from .normalize import normalize_item_name, to_price_entry, parse_receipt, receipt_to_dict
from .catalog import load_catalog, save_catalog
