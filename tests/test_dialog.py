from textual.widgets import Button, Static

from conftest import settle, wait_shown
from ui.controls import Anchor, SubmitButton, role_of
from core.source_role import Link, Other, Submit
from ui.dialog import ConfirmDialog, dialog


def labels(box: ConfirmDialog) -> dict:
    return {
        name: [str(button.label) for button in box.query(f".{name}").results(Button)]
        for name in ("yes", "no")
    }


def heading(box: ConfirmDialog) -> str:
    box.query_one(".dialog_heading", Static)
    return box.heading.plain


async def test_default_dialog(page_app):
    async with page_app.run_test() as pilot:
        box = dialog(page_app)
        await wait_shown(pilot, page_app.overlays.active)

        assert labels(box) == {"yes": ["Yes"], "no": ["No"]}
        assert heading(box) == "Are you sure?"
        assert box.has_class("generic_dialog")
        assert page_app.overlays.active.settings["position"] == "center"


async def test_custom_labels(page_app):
    async with page_app.run_test() as pilot:
        box = dialog(page_app, {"text": "Overwrite [b]file[/b]?", "yes_text": "Overwrite", "no_text": "Keep"})
        await wait_shown(pilot, page_app.overlays.active)

        assert labels(box) == {"yes": ["Overwrite"], "no": ["Keep"]}
        assert heading(box) == "Overwrite [b]file[/b]?"


async def test_suppressed_yes_turns_no_into_acknowledgement(page_app):
    async with page_app.run_test() as pilot:
        box = dialog(page_app, {"text": "Done", "yes_text": None})
        await wait_shown(pilot, page_app.overlays.active)

        assert labels(box) == {"yes": [], "no": ["OK"]}
        assert box.settings["no_text"] == "OK"


async def test_suppressed_yes_keeps_explicit_no_label(page_app):
    async with page_app.run_test() as pilot:
        box = dialog(page_app, {"yes_text": None, "no_text": "Close"})
        await wait_shown(pilot, page_app.overlays.active)
        assert labels(box) == {"yes": [], "no": ["Close"]}


async def test_no_closes_dialog(page_app):
    async with page_app.run_test() as pilot:
        box = dialog(page_app)
        await wait_shown(pilot, page_app.overlays.active)

        box.query_one(".no", Button).press()
        await settle(pilot)

        assert page_app.overlays.active is None
        assert not page_app.screen.query(ConfirmDialog)


async def test_yes_on_submit_button_submits_form(page_app):
    async with page_app.run_test() as pilot:
        source = page_app.query_one("#save", SubmitButton)
        box = dialog(source)
        await wait_shown(pilot, page_app.overlays.active)

        box.query_one(".yes", Button).press()
        await settle(pilot)

        assert [form.id for form in page_app.submitted] == ["form"]
        assert page_app.opened == []


async def test_yes_on_link_navigates(page_app):
    async with page_app.run_test() as pilot:
        source = page_app.query_one("#docs", Anchor)
        box = dialog(source)
        await wait_shown(pilot, page_app.overlays.active)

        box.query_one(".yes", Button).press()
        await settle(pilot)

        assert page_app.opened == ["https://example.com/docs"]
        assert page_app.submitted == []


async def test_yes_on_button_outside_form_does_nothing(page_app):
    async with page_app.run_test() as pilot:
        box = dialog(page_app.query_one("#orphan", SubmitButton))
        await wait_shown(pilot, page_app.overlays.active)

        box.query_one(".yes", Button).press()
        await settle(pilot)

        assert page_app.submitted == []
        assert page_app.opened == []


async def test_custom_actions(page_app):
    async with page_app.run_test() as pilot:
        answers = []
        box = dialog(page_app, {"on_yes": lambda: answers.append("yes"), "on_no": lambda: answers.append("no")})
        await wait_shown(pilot, page_app.overlays.active)

        box.query_one(".yes", Button).press()
        await settle(pilot)
        box.query_one(".no", Button).press()
        await settle(pilot)

        assert answers == ["yes", "no"]
        # Custom "no" replaces the default close
        assert page_app.overlays.active is not None


async def test_overlay_settings_pass_through(page_app):
    async with page_app.run_test() as pilot:
        calls = []
        dialog(page_app, {"fade_in": 20, "position": "fixed", "callback": lambda: calls.append(1)})
        handle = page_app.overlays.active
        assert handle.fade_ms == 20
        await wait_shown(pilot, handle)

        assert handle.placement.mode == "fixed"
        assert calls == [1]


async def test_malformed_action_is_accepted_at_build_time(page_app):
    async with page_app.run_test() as pilot:
        box = dialog(page_app, {"on_yes": "not callable"})
        await wait_shown(pilot, page_app.overlays.active)
        assert box.settings["on_yes"] == "not callable"


async def test_roles_of_page_controls(page_app):
    async with page_app.run_test():
        form = page_app.query_one("#form")
        assert role_of(page_app.query_one("#save")) == Submit(form)
        assert role_of(page_app.query_one("#orphan")) == Submit(None)
        assert role_of(page_app.query_one("#docs")) == Link("https://example.com/docs")
        assert role_of(page_app) == Other()
        assert role_of(None) == Other()
