"""
Endpoint incident dashboard - Textual interface over the incident REST service.
"""

import sys
from typing import Optional

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, DataTable, Footer, Header, Input, Label, Select, Static

from src.core.config import PAGE_SIZE_OPTIONS, DEFAULT_PAGE_SIZE, validate_config
from src.core.schema import Incident
from util.logging import logger
from .form import (
    IncidentFormData,
    SEVERITY_OPTIONS,
    STATUS_OPTIONS,
    TYPE_OPTIONS,
    type_label,
)
from .incident_list import IncidentListController, ListView
from .sort_controller import SortColumn
from .store_client import IncidentStoreClient, StoreError

SEVERITY_STYLES = {
    "critical": "bold red",
    "high": "bold dark_orange",
    "medium": "yellow",
    "low": "green",
}

STATUS_STYLES = {
    "open": "blue",
    "investigating": "magenta",
    "resolved": "green",
    "closed": "grey50",
}

COLUMNS = [
    ("id", "ID"),
    ("timestamp", "Timestamp"),
    ("source_ip", "Source IP"),
    ("severity", "Severity"),
    ("type", "Type"),
    ("status", "Status"),
    ("description", "Description"),
]

DESCRIPTION_WIDTH = 40
SORTABLE = {column.value: column for column in SortColumn}


def truncate(value: Optional[str], width: int = DESCRIPTION_WIDTH) -> str:
    if not value:
        return "—"
    return value if len(value) <= width else value[:width - 1] + "…"


def incident_cells(incident: Incident) -> tuple:
    return (
        str(incident.id),
        incident.timestamp.astimezone().strftime("%Y-%m-%d %H:%M:%S"),
        incident.source_ip,
        Text(incident.severity.value, style=SEVERITY_STYLES[incident.severity.value]),
        type_label(incident.type.value),
        Text(incident.status.value, style=STATUS_STYLES[incident.status.value]),
        truncate(incident.description),
    )


class IncidentFormScreen(ModalScreen):
    """Create or edit an incident. Dismisses with the API payload, or None on cancel."""

    def __init__(self, incident: Optional[Incident] = None):
        super().__init__()
        self.incident = incident
        self.form = IncidentFormData.from_incident(incident) if incident else IncidentFormData()

    def compose(self) -> ComposeResult:
        title = "Edit Incident" if self.incident else "New Incident"
        yield Vertical(
            Static(title, classes="title"),
            Label("Timestamp * (YYYY-MM-DDTHH:MM, UTC)"),
            Input(value=self.form.timestamp, placeholder="2026-02-11T08:00", id="timestamp"),
            Label("Source IP *"),
            Input(value=self.form.source_ip, placeholder="192.168.1.100", id="source_ip"),
            Label("Severity *"),
            Select([(s.capitalize(), s) for s in SEVERITY_OPTIONS], value=self.form.severity,
                   allow_blank=False, id="severity"),
            Label("Type *"),
            Select([(type_label(t), t) for t in TYPE_OPTIONS], value=self.form.type,
                   allow_blank=False, id="type"),
            Label("Status"),
            Select([(s.capitalize(), s) for s in STATUS_OPTIONS], value=self.form.status,
                   allow_blank=False, id="status"),
            Label("Description"),
            Input(value=self.form.description, id="description"),
            Static("", id="form-errors", classes="errors"),
            Horizontal(
                Button("Save", id="form-save", variant="primary"),
                Button("Cancel", id="form-cancel"),
                classes="buttons",
            ),
            id="form-container",
        )

    def _collect(self) -> IncidentFormData:
        return IncidentFormData(
            timestamp=self.query_one("#timestamp", Input).value,
            source_ip=self.query_one("#source_ip", Input).value,
            severity=self.query_one("#severity", Select).value,
            type=self.query_one("#type", Select).value,
            status=self.query_one("#status", Select).value,
            description=self.query_one("#description", Input).value,
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "form-cancel":
            self.dismiss(None)
        elif event.button.id == "form-save":
            self.form = self._collect()
            errors = self.form.validate()
            if errors:
                self.query_one("#form-errors", Static).update("\n".join(errors.values()))
                return
            self.dismiss(self.form.to_payload())


class ConfirmDeleteScreen(ModalScreen):
    """Ask before deleting. Dismisses with True to delete."""

    def __init__(self, incident: Incident):
        super().__init__()
        self.incident = incident

    def compose(self) -> ComposeResult:
        yield Vertical(
            Static(f"Are you sure you want to delete incident #{self.incident.id}?", classes="title"),
            Horizontal(
                Button("Delete", id="confirm-delete", variant="error"),
                Button("Cancel", id="cancel-delete"),
                classes="buttons",
            ),
            id="confirm-container",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "confirm-delete")


class IncidentDashboardApp(App):
    """Endpoint Incident Log dashboard."""

    CSS = """
    .title {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }

    .errors {
        color: red;
        margin-top: 1;
    }

    .buttons {
        height: auto;
        margin-top: 1;
    }

    #summary, #message {
        height: auto;
        padding: 0 1;
        color: gray;
    }

    #pager {
        height: auto;
        padding: 0 1;
    }

    #page-label {
        width: auto;
        padding: 1 2;
    }

    #page-size {
        width: 16;
    }

    #form-container, #confirm-container {
        width: 70;
        height: auto;
        border: solid cyan;
        padding: 1 2;
        background: $panel;
    }

    IncidentFormScreen, ConfirmDeleteScreen {
        align: center middle;
    }
    """

    TITLE = "Endpoint Incident Log"

    BINDINGS = [
        ("a", "add_incident", "Add"),
        ("e", "edit_incident", "Edit"),
        ("d", "delete_incident", "Delete"),
        ("r", "refresh", "Refresh"),
        ("q", "quit", "Quit"),
    ]

    def __init__(self, store: Optional[IncidentStoreClient] = None, page_size: int = DEFAULT_PAGE_SIZE):
        super().__init__()
        self.store = store or IncidentStoreClient()
        self.controller = IncidentListController(page_size=page_size)

    def compose(self) -> ComposeResult:
        yield Header()
        yield Container(
            Static("", id="message"),
            DataTable(id="incidents", cursor_type="row", zebra_stripes=True),
            Static("", id="summary"),
            Horizontal(
                Button("« First", id="page-first"),
                Button("‹ Prev", id="page-previous"),
                Static("1 / 1", id="page-label"),
                Button("Next ›", id="page-next"),
                Button("Last »", id="page-last"),
                Select([(f"{size} / page", size) for size in PAGE_SIZE_OPTIONS],
                       value=self.controller.pager.state.page_size, allow_blank=False, id="page-size"),
                Button("Add Incident", id="add-incident", variant="primary"),
                id="pager",
            ),
        )
        yield Footer()

    def on_mount(self) -> None:
        logger.info("Incident dashboard started")
        self.action_refresh()

    # Rendering

    def render_view(self) -> None:
        view = self.controller.view()
        self._render_table(view)

        page = view.page
        self.query_one("#summary", Static).update(page.summary)
        self.query_one("#page-label", Static).update(page.page_label)
        self.query_one("#page-first", Button).disabled = not page.can_first
        self.query_one("#page-previous", Button).disabled = not page.can_previous
        self.query_one("#page-next", Button).disabled = not page.can_next
        self.query_one("#page-last", Button).disabled = not page.can_last

        message = self.query_one("#message", Static)
        if view.last_error:
            message.update(Text(f"Error: {view.last_error}  (press r to try again)", style="red"))
        elif view.is_empty:
            message.update("No incidents found. Press a to create your first incident.")
        else:
            message.update("")

    def _render_table(self, view: ListView) -> None:
        table = self.query_one("#incidents", DataTable)
        selected_id = self._selected_incident_id()
        table.clear(columns=True)
        for key, label in COLUMNS:
            if key in SORTABLE:
                label = f"{label} {view.indicators[SORTABLE[key]].label}"
            table.add_column(label, key=key)
        for incident in view.page.records:
            table.add_row(*incident_cells(incident), key=str(incident.id))

        # Keep the cursor on the same incident while it is on the visible page
        page_ids = [incident.id for incident in view.page.records]
        if selected_id in page_ids:
            table.move_cursor(row=page_ids.index(selected_id))

    def _selected_incident_id(self) -> Optional[int]:
        table = self.query_one("#incidents", DataTable)
        if table.row_count == 0:
            return None
        row_key = table.coordinate_to_cell_key(table.cursor_coordinate).row_key
        return int(row_key.value)

    def _selected_incident(self) -> Optional[Incident]:
        incident_id = self._selected_incident_id()
        if incident_id is None:
            return None
        return next((i for i in self.controller.records if i.id == incident_id), None)

    # Events

    def on_data_table_header_selected(self, event: DataTable.HeaderSelected) -> None:
        column = SORTABLE.get(event.column_key.value)
        if column is None:
            return
        self.controller.click_column(column)
        self.render_view()

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id != "page-size" or event.value == Select.BLANK:
            return
        if int(event.value) == self.controller.pager.state.page_size:
            return
        self.controller.set_page_size(int(event.value))
        self.render_view()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id

        if button_id == "page-first":
            self.controller.first_page()
        elif button_id == "page-previous":
            self.controller.previous_page()
        elif button_id == "page-next":
            self.controller.next_page()
        elif button_id == "page-last":
            self.controller.last_page()
        elif button_id == "add-incident":
            self.action_add_incident()
            return
        self.render_view()

    # Actions

    def action_refresh(self) -> None:
        try:
            self.controller.refresh(self.store)
        except StoreError as e:
            self.notify(f"Failed to fetch incidents. Is the backend running? ({e})",
                        title="Fetch Failed", severity="error")
        self.render_view()

    def action_add_incident(self) -> None:
        self.push_screen(IncidentFormScreen(), self._submit_create)

    def action_edit_incident(self) -> None:
        incident = self._selected_incident()
        if incident is None:
            return
        self.push_screen(IncidentFormScreen(incident), lambda payload: self._submit_update(incident, payload))

    def action_delete_incident(self) -> None:
        incident = self._selected_incident()
        if incident is None:
            return
        self.push_screen(ConfirmDeleteScreen(incident), lambda confirmed: self._submit_delete(incident, confirmed))

    def _notify_saved(self, message: str, title: str) -> None:
        if self.controller.last_error:
            self.notify(f"{message}, but the list could not be refreshed ({self.controller.last_error})",
                        title=title, severity="warning")
        else:
            self.notify(message, title=title)

    def _submit_create(self, payload: Optional[dict]) -> None:
        if payload is None:
            return
        try:
            created = self.controller.create(self.store, payload)
        except StoreError as e:
            self.notify(f"Failed to create incident: {e}", title="Create Failed", severity="error")
        else:
            self._notify_saved(f"Incident #{created.id} created", title="Saved")
        self.render_view()

    def _submit_update(self, incident: Incident, payload: Optional[dict]) -> None:
        if payload is None:
            return
        try:
            self.controller.update(self.store, incident.id, payload)
        except StoreError as e:
            self.notify(f"Failed to update incident: {e}", title="Update Failed", severity="error")
        else:
            self._notify_saved(f"Incident #{incident.id} updated", title="Saved")
        self.render_view()

    def _submit_delete(self, incident: Incident, confirmed: bool) -> None:
        if not confirmed:
            return
        try:
            self.controller.delete(self.store, incident.id)
        except StoreError as e:
            self.notify(f"Failed to delete incident: {e}", title="Delete Failed", severity="error")
        else:
            self._notify_saved(f"Incident #{incident.id} deleted", title="Deleted")
        self.render_view()


def main():
    """Main dashboard entry point."""
    issues = validate_config()
    if issues:
        for issue in issues:
            print(f"❌ Configuration error: {issue}")
        sys.exit(1)

    try:
        print("🚀 Starting Endpoint Incident Log dashboard...")
        IncidentDashboardApp().run()
    except KeyboardInterrupt:
        print("\nℹ️  Dashboard interrupted by user")
        logger.info("Dashboard exited via keyboard interrupt")


if __name__ == "__main__":
    main()
