# product_form/controller.py
"""
State and submit lifecycle of the Add Product dialog.

    idle --open--> editing --submit--> submitting --ok--> idle
                      ^                     |
                      +------failure--------+

Closing is allowed from any state and discards the draft. A request that is
still in flight when the dialog closes is not aborted; its result is ignored
because the dialog session it belonged to has been cancelled.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from product_form.config import settings
from product_form.core.state_machine import InvalidTransition, StateMachine
from product_form.services.notifications import Notifier
from product_form.services.submission import SubmissionClient, SubmissionError, SubmissionResult
from product_form.utils.images import read_image_as_data_url
from product_form.validation import DraftValidationError, FieldError, validate_draft

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Product added successfully!"
FAILURE_MESSAGE = "Failed to add product"

FIELDS = ("name", "description", "price", "type", "color")


class FormState(str, Enum):
    IDLE = "idle"
    EDITING = "editing"
    SUBMITTING = "submitting"


FORM_TRANSITIONS: Dict[str, List[str]] = {
    FormState.IDLE.value: [FormState.EDITING.value],
    FormState.EDITING.value: [FormState.IDLE.value, FormState.SUBMITTING.value],
    FormState.SUBMITTING.value: [FormState.IDLE.value, FormState.EDITING.value],
}


class FormNotEditable(InvalidTransition):
    pass


class CancellationToken:
    """Tied to one open/close cycle of the dialog."""

    def __init__(self):
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class SubmitOutcome:
    # submitted | invalid | failed | busy | stale
    status: str
    errors: Dict[str, FieldError] = field(default_factory=dict)
    error: Optional[SubmissionError] = None
    result: Optional[SubmissionResult] = None

    @property
    def ok(self) -> bool:
        return self.status == "submitted"


class ProductFormController:
    def __init__(self, client: SubmissionClient, notifier: Optional[Notifier] = None,
                 max_image_bytes: Optional[int] = None):
        self.client = client
        self.notifier = notifier or Notifier()
        self.max_image_bytes = settings.MAX_IMAGE_BYTES if max_image_bytes is None else max_image_bytes
        self._sm = StateMachine(FormState.IDLE.value, FORM_TRANSITIONS)
        for from_state, targets in FORM_TRANSITIONS.items():
            for to_state in targets:
                self._sm.register_after(from_state, to_state, self._log_transition)
        self._token = CancellationToken()
        self._token.cancel()
        self.session = 0
        self._draft: Dict[str, Any] = {}
        self._image: Optional[str] = None
        self.errors: Dict[str, FieldError] = {}

    # --- read-only views ---

    @property
    def state(self) -> FormState:
        return FormState(self._sm.state)

    @property
    def is_open(self) -> bool:
        return self.state is not FormState.IDLE

    @property
    def is_submitting(self) -> bool:
        return self.state is FormState.SUBMITTING

    @property
    def draft(self) -> Dict[str, Any]:
        return dict(self._draft)

    @property
    def image(self) -> Optional[str]:
        return self._image

    @property
    def history(self):
        return list(self._sm.history)

    def _log_transition(self, entry) -> None:
        logger.debug("Add Product dialog %s -> %s (transition %d, %s)",
                     entry["from"], entry["to"], self._sm.version, entry["meta"])

    # --- dialog ---

    def _reset(self) -> None:
        self._draft = {}
        self._image = None
        self.errors = {}

    def open_dialog(self) -> None:
        if self.is_open:
            return
        self.session += 1
        self._token = CancellationToken()
        self._reset()
        self._sm.apply(FormState.EDITING.value, meta={"session": self.session})

    def close_dialog(self) -> None:
        """Discards in-progress edits without confirmation."""
        if not self.is_open:
            return
        self._token.cancel()
        self._reset()
        self._sm.apply(FormState.IDLE.value, meta={"session": self.session, "reason": "closed"})

    def _require_editing(self) -> None:
        if self.state is not FormState.EDITING:
            raise FormNotEditable(f"Form is not editable while {self.state.value}")

    # --- fields ---

    def update_field(self, name: str, value: Any) -> None:
        if name not in FIELDS:
            raise KeyError(name)
        self._require_editing()
        self._draft[name] = value

    async def select_image(self, path: Union[str, Path, None]) -> Optional[str]:
        """
        Read the chosen file into the image field. Returns the stored data URL,
        or None when nothing was stored (no file, unreadable file, not an image, dialog closed
        while reading).
        """
        if path is None:
            return None
        self._require_editing()
        token = self._token
        data = await read_image_as_data_url(path, max_bytes=self.max_image_bytes)
        if token.cancelled or data is None:
            return None
        self._image = data
        return data

    def clear_image(self) -> None:
        self._require_editing()
        self._image = None

    # --- submit ---

    async def submit(self) -> SubmitOutcome:
        if self.is_submitting:
            return SubmitOutcome("busy")
        self._require_editing()

        try:
            draft = validate_draft(self._draft)
        except DraftValidationError as exc:
            self.errors = exc.errors
            return SubmitOutcome("invalid", errors=exc.errors)

        self.errors = {}
        token = self._token
        self._sm.apply(FormState.SUBMITTING.value, meta={"session": self.session})
        try:
            result = await self.client.create_product(draft, self._image)
        except SubmissionError as exc:
            if token.cancelled:
                return SubmitOutcome("stale", error=exc)
            logger.error("Error adding product: %s", exc)
            self._sm.apply(FormState.EDITING.value, meta={"session": self.session, "error": str(exc)})
            self.notifier.error(FAILURE_MESSAGE)
            return SubmitOutcome("failed", error=exc)
        except Exception:
            if not token.cancelled:
                self._sm.apply(FormState.EDITING.value, meta={"session": self.session})
            raise

        if token.cancelled:
            return SubmitOutcome("stale", result=result)

        self.notifier.success(SUCCESS_MESSAGE)
        token.cancel()
        self._reset()
        self._sm.apply(FormState.IDLE.value, meta={"session": self.session, "reason": "submitted"})
        return SubmitOutcome("submitted", result=result)
