# product_form/api/routes/products.py
from datetime import datetime
import json
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from product_form.api.deps import get_db
from product_form.database import FileBackedDB
from product_form.schemas.product import ProductOut, ProductPayload

router = APIRouter(prefix="/api", tags=["products"])


def _load_description(raw: Optional[str]) -> Optional[str]:
    """
    Descriptions are stored JSON-encoded so that an empty description ("")
    and an absent one (null) stay distinct in the CSV.
    """
    if raw is None:
        return None
    try:
        value = json.loads(raw)
    except ValueError:
        # plain text written by hand into the file
        return raw
    return value if value is None or isinstance(value, str) else raw


def _row_to_product_out(row: dict) -> ProductOut:
    # CSV rows come back as strings
    return ProductOut(
        id=str(row.get("id")),
        name=row.get("name") or "",
        description=_load_description(row.get("description")),
        price=float(row.get("price") or 0.0),
        type=row.get("type"),
        color=row.get("color"),
        image=row.get("image") or "",
        created_at=row.get("created_at") or None,
    )


@router.post("/createProduct", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(payload: ProductPayload, db: FileBackedDB = Depends(get_db)):
    """
    Create a product from the Add Product dialog. `image` is stored as sent
    (a data URL or the placeholder name).
    """
    data = payload.model_dump(mode="json")
    data["description"] = json.dumps(payload.description)
    data["created_at"] = datetime.utcnow().isoformat(sep=" ")
    saved = db.create_record("products", data, id_field="id")
    return _row_to_product_out(saved)


@router.get("/products", response_model=List[ProductOut])
def list_products(db: FileBackedDB = Depends(get_db)):
    return [_row_to_product_out(r) for r in db.list_records("products")]
