# tests/test_end_to_end.py
import asyncio

import httpx

from product_form.controller import FormState, ProductFormController
from product_form.database import db
from product_form.main import app
from product_form.services.submission import SubmissionClient


def test_dialog_creates_product_through_local_api(valid_fields, sample_jpeg_file):
    """
    Full flow against the local createProduct endpoint:
      - open dialog, fill fields, pick an image
      - submit -> product stored with the data URL
      - second product without an image -> placeholder stored
    """

    async def run():
        transport = httpx.ASGITransport(app=app)
        async with SubmissionClient(base_url="http://testserver", transport=transport) as sub:
            ctrl = ProductFormController(sub)

            ctrl.open_dialog()
            for k, v in valid_fields.items():
                ctrl.update_field(k, v)
            await ctrl.select_image(sample_jpeg_file)
            first = await ctrl.submit()

            ctrl.open_dialog()
            for k, v in dict(valid_fields, name="Slim Jeans", type="JEANS").items():
                ctrl.update_field(k, v)
            second = await ctrl.submit()
            return ctrl, first, second

    ctrl, first, second = asyncio.run(run())
    assert first.ok and second.ok
    assert first.result.status_code == 201
    assert ctrl.state is FormState.IDLE

    rows = db.list_records("products")
    assert [r["name"] for r in rows] == ["Classic Tee", "Slim Jeans"]
    assert rows[0]["image"].startswith("data:image/jpeg;base64,")
    assert rows[1]["image"] == "random.jpg"
    assert rows[1]["type"] == "JEANS"
