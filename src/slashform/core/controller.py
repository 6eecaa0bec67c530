"""
Sync controller.

Keeps a FormState and the host's document text in step:

    document arrives -> parse -> merge with defaults -> state     (external)
    field edited     -> state -> serialize -> emit to host        (internal)

The controller is an explicit state machine:

    LOADING --document ok--> READY --edit--> READY (emits)
       |                      |  ^
       |                 bad document
       |                      v  |
       +---bad document--> ERROR --reset--> READY (emits)

Two guards keep the loop from feeding itself. Nothing is emitted before
the first successful load (or an explicit reset), so defaults never
overwrite a document that has not been read yet. And a document equal to
our own last emission is recognised as the host echoing it back and is
not re-parsed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Any

from .codec import DocumentCodec
from .errors import ControllerStateError, DecodeError, FieldReadOnlyError
from .evaluator import build_render_plan
from .ir import FieldPlan, RenderPlan
from .recovery import ErrorRecovery, ErrorReport
from .registry import SchemaRegistry
from .state import FormState

logger = logging.getLogger(__name__)

EmitCallback = Callable[[str], None]


class ControllerStatus(str, Enum):
    """Lifecycle status of a sync controller."""

    LOADING = "loading"  # No document decoded yet
    ERROR = "error"  # Latest document failed to decode
    READY = "ready"  # State mirrors the document; edits allowed


@dataclass(frozen=True)
class FieldBinding:
    """
    A visible field paired with its write path.

    on_change replaces the value; on_toggle flips one option and is only
    set for multi-select fields.
    """

    plan: FieldPlan
    on_change: Callable[[Any], FormState]
    on_toggle: Callable[[str], FormState] | None = None


class SyncController:
    """
    Owns the editing session state and synchronises it with the host document.

    Args:
        registry: Schema describing the document
        emit: Host callback receiving replacement document text
        codec: Document codec (defaults to YAML with standard options)
        recovery: Error recovery helper (built from registry and codec if omitted)
    """

    def __init__(
        self,
        registry: SchemaRegistry,
        emit: EmitCallback,
        codec: DocumentCodec | None = None,
        recovery: ErrorRecovery | None = None,
    ):
        self.registry = registry
        self.codec = codec or DocumentCodec()
        self.recovery = recovery or ErrorRecovery(registry, self.codec)
        self._emit = emit

        self._status = ControllerStatus.LOADING
        self._state = self.recovery.default_state()
        self._error: DecodeError | None = None
        self._document: str | None = None
        self._last_emitted: str | None = None
        self._has_loaded = False
        self._plan: RenderPlan | None = None
        self._plan_state: FormState | None = None

    # =========================================================================
    # Read access
    # =========================================================================

    @property
    def status(self) -> ControllerStatus:
        return self._status

    @property
    def state(self) -> FormState:
        """Current immutable state snapshot."""
        return self._state

    @property
    def error(self) -> DecodeError | None:
        return self._error

    @property
    def document(self) -> str | None:
        """Last document text received from the host or emitted to it."""
        return self._document

    @property
    def has_loaded(self) -> bool:
        """Check if a document was decoded (or a reset applied) at least once."""
        return self._has_loaded

    def render_plan(self) -> RenderPlan:
        """
        Render plan for the current snapshot.

        The same plan object is returned until the state changes.

        Raises:
            ControllerStateError: If the controller is not READY
        """
        self._require(ControllerStatus.READY, "render fields")
        if self._plan is None or self._plan_state is not self._state:
            self._plan = build_render_plan(self.registry, self._state)
            self._plan_state = self._state
        return self._plan

    def bindings(self) -> list[FieldBinding]:
        """One binding per visible field, in schema order."""
        bindings = []
        for field_plan in self.render_plan().fields:
            on_toggle = None
            if self.registry.get(field_plan.name).is_multi_select:
                on_toggle = partial(self.toggle, field_plan.name)
            bindings.append(
                FieldBinding(
                    plan=field_plan,
                    on_change=partial(self.edit, field_plan.name),
                    on_toggle=on_toggle,
                )
            )
        return bindings

    def error_report(self) -> ErrorReport | None:
        """Decode problem to show the author, or None unless in ERROR."""
        if self._status != ControllerStatus.ERROR or self._error is None:
            return None
        return self.recovery.report(self._error)

    # =========================================================================
    # Transitions
    # =========================================================================

    def load_document(self, text: str, source: str | None = None) -> ControllerStatus:
        """
        Handle document text arriving from the host.

        Called on first mount and on every later external change. A failed
        decode keeps the last good state so a reset stays deterministic.

        Returns:
            Status after the document was processed
        """
        if self._status == ControllerStatus.READY and text == self._last_emitted:
            logger.debug("Ignoring document echo of our own emission")
            return self._status

        self._document = text
        try:
            raw = self.codec.parse(text, source=source)
        except DecodeError as e:
            logger.warning(f"Document failed to decode: {e.message}")
            self._error = e
            self._transition(ControllerStatus.ERROR)
            return self._status

        self._state = FormState.from_raw(self.registry, raw, version=self._state.version + 1)
        self._error = None
        self._has_loaded = True
        # Only emissions made since this document arrived count as echoes
        self._last_emitted = None
        self._transition(ControllerStatus.READY)
        return self._status

    def edit(self, name: str, value: Any) -> FormState:
        """
        Replace one field's value and emit the updated document.

        Validation is advisory: an invalid value is still written out.

        Raises:
            ControllerStateError: If the controller is not READY
            UnknownFieldError: If the schema does not declare the field
            FieldReadOnlyError: If the field's enablement rule is false
        """
        self._require(ControllerStatus.READY, f"edit field '{name}'")
        definition = self.registry.get(name)
        if not definition.is_enabled(self._state):
            raise FieldReadOnlyError(f"Field '{name}' is read-only in the current state")

        return self._apply(self._state.set(name, value))

    def toggle(self, name: str, option: str) -> FormState:
        """
        Flip one option of a multi-select field and emit the updated document.

        Raises:
            ControllerStateError: If the controller is not READY
            UnknownFieldError: If the schema does not declare the field
            FieldReadOnlyError: If the field's enablement rule is false
            InvalidOptionError: If the field is not multi-select or the option is undeclared
        """
        self._require(ControllerStatus.READY, f"toggle field '{name}'")
        if not self.registry.get(name).is_enabled(self._state):
            raise FieldReadOnlyError(f"Field '{name}' is read-only in the current state")

        return self._apply(self._state.toggle(name, option))

    def reset(self) -> str:
        """
        Rebuild state from schema defaults and emit the default document.

        Available from ERROR and READY. A reset counts as a first load, so
        emission is allowed afterwards even if no document ever decoded.

        Returns:
            The emitted default document text

        Raises:
            ControllerStateError: If no document has arrived yet
        """
        if self._status == ControllerStatus.LOADING:
            raise ControllerStateError("Cannot reset before a document has arrived")

        logger.info(f"Resetting '{self.registry.name}' document to default values")
        self._state = self.recovery.default_state(version=self._state.version + 1)
        self._error = None
        self._has_loaded = True
        self._transition(ControllerStatus.READY)
        return self._emit_state()

    # =========================================================================
    # Internals
    # =========================================================================

    def _apply(self, new_state: FormState) -> FormState:
        if new_state == self._state:
            logger.debug("Edit left state unchanged; nothing to emit")
            return self._state

        self._state = new_state
        if self._has_loaded:
            self._emit_state()
        else:
            logger.debug("Suppressing emission before the first successful load")
        return self._state

    def _emit_state(self) -> str:
        text = self.codec.serialize(self._state.to_raw())
        # Recorded before the host sees it so a synchronous echo is recognised
        self._last_emitted = text
        self._document = text
        logger.debug(f"Emitting document for state v{self._state.version}")
        self._emit(text)
        return text

    def _transition(self, status: ControllerStatus) -> None:
        if status != self._status:
            logger.debug(f"Controller {self._status.value} -> {status.value}")
        self._status = status

    def _require(self, status: ControllerStatus, action: str) -> None:
        if self._status != status:
            raise ControllerStateError(
                f"Cannot {action} while controller is {self._status.value}"
            )
