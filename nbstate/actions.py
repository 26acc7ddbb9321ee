"""
Actions: the messages a UI shell dispatches to the engine.

Each action is a frozen pydantic model tagged by ``type``. Payloads coming
from a UI may use the camelCase field names (``cellType``, ``scrollToCell``,
``elemID``...); attributes are snake_case.
"""

from typing import Annotated, Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from nbstate.errors import InvalidActionError
from nbstate.notebook import Mode, ViewMode


class _Action(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class InsertCell(_Action):
    """Insert a scripting cell next to the selected cell."""
    type: Literal["InsertCell"] = "InsertCell"
    direction: Literal["above", "below"]


class AddCell(_Action):
    """Append a cell of the given type."""
    type: Literal["AddCell"] = "AddCell"
    cell_type: str = Field(alias="cellType")


class SelectCell(_Action):
    type: Literal["SelectCell"] = "SelectCell"
    id: int
    scroll_to_cell: bool = Field(default=False, alias="scrollToCell")


class MoveCellUp(_Action):
    type: Literal["MoveCellUp"] = "MoveCellUp"


class MoveCellDown(_Action):
    type: Literal["MoveCellDown"] = "MoveCellDown"


class UpdateInputContent(_Action):
    type: Literal["UpdateInputContent"] = "UpdateInputContent"
    content: str


class ChangeElementType(_Action):
    type: Literal["ChangeElementType"] = "ChangeElementType"
    element_type: str = Field(alias="elementType")


class ChangeDomElementId(_Action):
    type: Literal["ChangeDomElementId"] = "ChangeDomElementId"
    elem_id: str = Field(alias="elemID")


class ChangeCellType(_Action):
    """Retype the selected cell, discarding its value."""
    type: Literal["ChangeCellType"] = "ChangeCellType"
    cell_type: str = Field(alias="cellType")


class SetCellRowCollapseState(_Action):
    """Set overflow of one row in one view; defaults to the selected cell."""
    type: Literal["SetCellRowCollapseState"] = "SetCellRowCollapseState"
    cell_id: Optional[int] = Field(default=None, alias="cellId")
    row_type: str = Field(alias="rowType")
    view_mode: str = Field(alias="viewMode")
    row_overflow: Any = Field(alias="rowOverflow")


class MarkCellNotRendered(_Action):
    type: Literal["MarkCellNotRendered"] = "MarkCellNotRendered"


class EvaluateCell(_Action):
    """Evaluate a cell; defaults to the selected cell."""
    type: Literal["EvaluateCell"] = "EvaluateCell"
    cell_id: Optional[int] = Field(default=None, alias="cellId")


class DeleteCell(_Action):
    type: Literal["DeleteCell"] = "DeleteCell"


class ChangeMode(_Action):
    type: Literal["ChangeMode"] = "ChangeMode"
    mode: Mode


class ChangeViewMode(_Action):
    type: Literal["ChangeViewMode"] = "ChangeViewMode"
    view_mode: ViewMode = Field(alias="viewMode")


Action = Annotated[
    Union[
        InsertCell,
        AddCell,
        SelectCell,
        MoveCellUp,
        MoveCellDown,
        UpdateInputContent,
        ChangeElementType,
        ChangeDomElementId,
        ChangeCellType,
        SetCellRowCollapseState,
        MarkCellNotRendered,
        EvaluateCell,
        DeleteCell,
        ChangeMode,
        ChangeViewMode,
    ],
    Field(discriminator="type"),
]

ACTION_TYPES: dict[str, type[_Action]] = {
    cls.model_fields["type"].default: cls
    for cls in _Action.__subclasses__()
}

_adapter = TypeAdapter(Action)


def is_action(obj: Any) -> bool:
    return isinstance(obj, _Action)


def parse_action(payload: Mapping[str, Any]) -> Optional[_Action]:
    """
    Build an action from a raw payload.

    Args:
        payload: Mapping with a ``type`` key and the action's fields

    Returns:
        The action, or None when ``type`` is missing or not a known action

    Raises:
        InvalidActionError: If a known action's fields do not validate
    """
    action_type = payload.get("type")
    if not isinstance(action_type, str) or action_type not in ACTION_TYPES:
        return None
    try:
        return _adapter.validate_python(dict(payload))
    except ValidationError as e:
        raise InvalidActionError(f"invalid {payload['type']} action: {e}") from e
