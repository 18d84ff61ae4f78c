"""Display options set by ``hide``/``show``/``short`` lines."""

from __future__ import annotations

from dataclasses import dataclass

# Query-language component name -> LayoutOptions attribute
HIDEABLE_COMPONENTS: dict[str, str] = {
    "task count": "hide_task_count",
    "backlink": "hide_backlinks",
    "backlinks": "hide_backlinks",
    "priority": "hide_priority",
    "created date": "hide_created_date",
    "start date": "hide_start_date",
    "scheduled date": "hide_scheduled_date",
    "due date": "hide_due_date",
    "done date": "hide_done_date",
    "recurrence rule": "hide_recurrence_rule",
    "edit button": "hide_edit_button",
    "urgency": "hide_urgency",
    "tags": "hide_tags",
}


@dataclass
class LayoutOptions:
    """Which parts of each task and of the result are displayed."""

    hide_task_count: bool = False
    hide_backlinks: bool = False
    hide_priority: bool = False
    hide_created_date: bool = False
    hide_start_date: bool = False
    hide_scheduled_date: bool = False
    hide_due_date: bool = False
    hide_done_date: bool = False
    hide_recurrence_rule: bool = False
    hide_edit_button: bool = False
    hide_urgency: bool = True
    hide_tags: bool = False
    short_mode: bool = False
    explain_query: bool = False

    def set_component(self, component: str, hide: bool) -> None:
        setattr(self, HIDEABLE_COMPONENTS[component.lower()], hide)
