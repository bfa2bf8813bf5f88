"""User management form controller.

The page holds one form that is shown from the main menu, checks that the
password and its confirmation match while the user types, and can be filled
in from a row of the users table to edit that user. The element classes below
carry only the properties the controller reads or writes, so the same logic
drives a real page binding or a test.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

MISMATCH_MESSAGE = "La contraseña y su confirmación no coinciden."
ERROR_BORDER = "2px solid red"
ICON_VISIBLE = "IMG/ver.png"
ICON_HIDDEN = "IMG/ojo-cerrado (1).png"


class FormState(str, Enum):
    HIDDEN = "hidden"
    VISIBLE = "visible"


@dataclass
class Button:
    disabled: bool = False


@dataclass
class FormPanel:
    display: str = "none"


@dataclass
class TextInput:
    value: str = ""
    type: str = "text"
    border: str = ""


@dataclass
class ErrorLabel:
    text: str = ""


@dataclass
class Icon:
    src: str = ICON_HIDDEN


@dataclass
class Select:
    value: str = ""


@dataclass
class TableRow:
    """A clicked ``<tr>``; ``section`` is the tag of its parent (thead, tbody...)."""

    cells: list[str] = field(default_factory=list)
    section: str = "tbody"


class UserFormController:
    """Owns the user form's elements and reacts to their events."""

    def __init__(
        self,
        *,
        show_button: Button | None = None,
        form: FormPanel | None = None,
        error_label: ErrorLabel | None = None,
        identificacion: TextInput | None = None,
        usuario: TextInput | None = None,
        password: TextInput | None = None,
        repeat_password: TextInput | None = None,
        password_icon: Icon | None = None,
        estado: Select | None = None,
    ) -> None:
        self.show_button = show_button or Button()
        self.form = form or FormPanel()
        self.error_label = error_label or ErrorLabel()
        self.identificacion = identificacion or TextInput()
        self.usuario = usuario or TextInput()
        self.password = password or TextInput(type="password")
        self.repeat_password = repeat_password or TextInput(type="password")
        self.password_icon = password_icon or Icon()
        self.estado = estado or Select()

    @property
    def state(self) -> FormState:
        return FormState.HIDDEN if self.form.display == "none" else FormState.VISIBLE

    def show(self) -> None:
        self.form.display = "flex"
        self.show_button.disabled = True

    def close(self) -> None:
        self.form.display = "none"
        self.show_button.disabled = False
        self.clear_errors()

    def clear_errors(self) -> None:
        self.error_label.text = ""
        self.repeat_password.border = ""
        self.password.value = ""
        self.repeat_password.value = ""

    def validate_passwords(self) -> bool:
        """Flag a mismatch between both password fields.

        An empty confirmation is not an error yet. Returns whether the form
        currently shows no mismatch.
        """
        if self.repeat_password.value and self.password.value != self.repeat_password.value:
            self.error_label.text = MISMATCH_MESSAGE
            self.repeat_password.border = ERROR_BORDER
            return False
        self.error_label.text = ""
        self.repeat_password.border = ""
        return True

    def on_password_input(self, value: str) -> None:
        self.password.value = value
        self.validate_passwords()

    def on_repeat_input(self, value: str) -> None:
        self.repeat_password.value = value
        self.validate_passwords()

    def toggle_password(self) -> None:
        reveal = self.password.type == "password"
        self.password.type = "text" if reveal else "password"
        self.repeat_password.type = "text" if reveal else "password"
        self.password_icon.src = ICON_VISIBLE if reveal else ICON_HIDDEN

    def fill_from_row(self, cells: Sequence[str]) -> bool:
        if len(cells) < 4:
            return False
        identificacion, usuario, password, estado = (c.strip() for c in cells[:4])
        self.identificacion.value = identificacion
        self.usuario.value = usuario
        self.password.value = password
        self.repeat_password.value = password
        self.estado.value = estado
        return True

    def on_table_click(self, row: TableRow | None) -> bool:
        # header and footer rows are not records
        if row is None or row.section.lower() != "tbody":
            return False
        return self.fill_from_row(row.cells)

    def registration_payload(self) -> dict[str, str]:
        """Body for ``POST /registrar`` built from the current field values."""
        return {"usuario": self.usuario.value, "password": self.password.value}
