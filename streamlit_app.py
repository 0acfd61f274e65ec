import os

import streamlit as st
from loguru import logger

from config import load_settings
from db import WorkoutEntryRepository
from entry_service import SLOT_COUNT
from localization import translator
from logger_setup import setup_logger
from navigation import LogNavigator, View
from tools import CalendarTools
import catalog

_ = translator.gettext

WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
SLOT_FIELDS = ("weight", "reps", "memo")


class WorkoutLogApp:
    """Streamlit front end for the workout log."""

    def __init__(
        self, db_path: str | None = None, yaml_path: str = "settings.yaml"
    ) -> None:
        self.settings = load_settings(yaml_path)
        translator.set_language(self.settings.language)
        self.db_path = db_path or self.settings.db_path
        self._state_init()
        self.nav: LogNavigator = st.session_state.navigator

    def _state_init(self) -> None:
        if "navigator" not in st.session_state:
            setup_logger(self.settings.log_level, self.settings.log_file)
            entries = WorkoutEntryRepository(self.db_path, self.settings.storage_key)
            st.session_state.navigator = LogNavigator(entries)
        if "edit_token" not in st.session_state:
            st.session_state.edit_token = 0
        if "flash" not in st.session_state:
            st.session_state.flash = None

    @staticmethod
    def _slot_key(index: int, field: str) -> str:
        return f"slot_{st.session_state.edit_token}_{index}_{field}"

    def _sync_slots(self) -> None:
        for i in range(SLOT_COUNT):
            for field in SLOT_FIELDS:
                key = self._slot_key(i, field)
                if key in st.session_state:
                    self.nav.update_slot(i, field, st.session_state[key])

    def _leave_editor(self) -> None:
        if self.nav.view == View.EDIT_SETS:
            self._sync_slots()
        saved = self.nav.back_to_day()
        st.session_state.edit_token += 1
        if saved is not None:
            st.session_state.flash = (
                f"{catalog.lookup_exercise(saved.exercise_id, translate=True)}: "
                f"{len(saved.sets)} {_('Set')}"
            )

    def _delete_entry(self, entry_id: str) -> None:
        try:
            self.nav.entries.delete(entry_id)
        except ValueError:
            logger.warning(f"Entry {entry_id} was already removed")

    def _calendar_view(self) -> None:
        nav = self.nav
        prev_col, title_col, next_col = st.columns([1, 3, 1])
        prev_col.button("<", key="prev_month", on_click=nav.prev_month)
        title_col.subheader(f"{nav.year} / {nav.month0 + 1}")
        next_col.button(">", key="next_month", on_click=nav.next_month)

        header = st.columns(7)
        for col, label in zip(header, WEEKDAY_LABELS):
            col.caption(label)
        active = nav.active_days()
        for week in nav.month_grid():
            cols = st.columns(7)
            for col, day in zip(cols, week):
                if day is None:
                    col.write("")
                    continue
                date = CalendarTools.format_date(nav.year, nav.month0, day)
                label = f"{day}" + (" •" if day in active else "")
                if CalendarTools.is_today(date):
                    label = f"**{label}**"
                col.button(
                    label,
                    key=f"day_{day}",
                    on_click=nav.select_day,
                    args=(day,),
                )

    def _day_view(self) -> None:
        nav = self.nav
        st.subheader(CalendarTools.format_display_date(nav.selected_date or ""))
        if st.session_state.flash:
            st.success(st.session_state.flash)
            st.session_state.flash = None
        day_entries = nav.entries_for_selected_date()
        if not day_entries:
            st.info(_("No entries for this day"))
        for entry in day_entries:
            with st.container(border=True):
                st.markdown(
                    f"**{catalog.lookup_body_part(entry.body_part_id, translate=True)}"
                    f" / {catalog.lookup_exercise(entry.exercise_id, translate=True)}**"
                )
                for s in entry.sets:
                    memo = f" ({s.memo})" if s.memo else ""
                    st.write(f"{_('Set')} {s.set_number}: {s.weight:g} kg x {s.reps:g}{memo}")
                edit_col, del_col = st.columns(2)
                edit_col.button(
                    _("Edit"),
                    key=f"edit_{entry.id}",
                    on_click=nav.open_entry,
                    args=(entry.id,),
                )
                del_col.button(
                    _("Delete"),
                    key=f"delete_{entry.id}",
                    on_click=self._delete_entry,
                    args=(entry.id,),
                )
        st.button(_("Add exercise"), key="add_entry", on_click=nav.start_new_entry)
        st.button(
            _("Back to calendar"), key="back_calendar", on_click=nav.back_to_calendar
        )

    def _select_exercise_view(self) -> None:
        nav = self.nav
        st.subheader(_("Choose exercise"))
        for part in catalog.BODY_PARTS:
            st.markdown(f"**{_(part.name)}**")
            cols = st.columns(3)
            for col, ex in zip(cols, catalog.exercises_for(part.id)):
                col.button(
                    _(ex.name),
                    key=f"ex_{ex.id}",
                    on_click=nav.choose_exercise,
                    args=(part.id, ex.id),
                )
        st.button(_("Back to day"), key="back_day", on_click=self._leave_editor)

    def _edit_sets_view(self) -> None:
        nav = self.nav
        st.subheader(
            f"{CalendarTools.format_display_date(nav.selected_date or '')} "
            f"{catalog.lookup_exercise(nav.exercise_id or '', translate=True)}"
        )
        previous = nav.previous_record()
        with st.expander(_("Previous record"), expanded=True):
            if previous is None:
                st.write(_("No previous record"))
            else:
                st.caption(CalendarTools.format_display_date(previous.date))
                for s in previous.sets:
                    memo = f" ({s.memo})" if s.memo else ""
                    st.write(f"{_('Set')} {s.set_number}: {s.weight:g} kg x {s.reps:g}{memo}")
        for i, slot in enumerate(nav.slots):
            w_col, r_col, m_col = st.columns([1, 1, 2])
            w_col.text_input(
                f"{_('Set')} {i + 1} {_('Weight')}",
                value=slot.weight,
                key=self._slot_key(i, "weight"),
            )
            r_col.text_input(
                _("Reps"), value=slot.reps, key=self._slot_key(i, "reps")
            )
            m_col.text_input(
                _("Memo"), value=slot.memo, key=self._slot_key(i, "memo")
            )
        st.button(_("Save and back"), key="save_back", on_click=self._leave_editor)

    def run(self) -> None:
        st.title(_("Workout Calendar"))
        views = {
            View.CALENDAR: self._calendar_view,
            View.DAY: self._day_view,
            View.SELECT_EXERCISE: self._select_exercise_view,
            View.EDIT_SETS: self._edit_sets_view,
        }
        views[self.nav.view]()


if __name__ == "__main__":
    db_path = os.environ.get("DB_PATH")
    yaml_path = os.environ.get("YAML_PATH", "settings.yaml")
    WorkoutLogApp(db_path=db_path, yaml_path=yaml_path).run()
