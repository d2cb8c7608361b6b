# services/export_service.py

import csv
from datetime import date
from typing import Optional, Sequence, Tuple

import pandas as pd

from schemas import Product
from utils import plain_number

EXPORT_COLUMNS = ["ID", "Title", "Price", "Category", "Description", "Image URL"]


def export_filename(today: date) -> str:
    return f"products_export_{today.isoformat()}.csv"


def export_visible_page(products: Sequence[Product], today: Optional[date] = None) -> Optional[Tuple[str, bytes]]:
    """
    Serializes the visible page (not the whole filtered list) to CSV.

    Returns (filename, utf-8 bytes), or None when there is nothing to export.
    """
    if not products:
        return None

    rows = [{
        "ID": p.id,
        "Title": p.title,
        "Price": plain_number(p.price),
        "Category": p.category_name or "N/A",
        "Description": p.description or "",
        "Image URL": p.images[0] if p.images else "",
    } for p in products]

    # object dtype keeps whole prices as ints; text columns are always quoted
    df = pd.DataFrame(rows, columns=EXPORT_COLUMNS, dtype=object)
    content = df.to_csv(index=False, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    return export_filename(today or date.today()), content.encode("utf-8")
