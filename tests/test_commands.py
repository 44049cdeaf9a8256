# tests/test_commands.py

from __future__ import annotations

from tasklist.cli.commands import CommandRegistry, registry, render_list
from tasklist.core.controller import TaskListController
from tasklist.core.state import AppState
from tasklist.errors import StorageWriteError

from .fakes import FailingTaskStore, FakePrompter


def test_command_registry_routes_2_and_3_params(state: AppState) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2 " + args

    def h3(state, args, prompt):
        called["h3"] += 1
        return "h3 " + prompt.ask("?")

    reg.register("a", h2, "a")
    reg.register("b", h3, "b", aliases=["bee"])

    assert reg.handle(state, "/a x  y") == "h2 x  y"
    assert reg.handle(state, "/BEE", prompt=FakePrompter(answers=["ok"])) == "h3 ok"
    assert called == {"h2": 1, "h3": 1}


def test_command_registry_unknown_and_non_command(state: AppState) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_help_lists_commands(state: AppState) -> None:
    text = registry.handle(state, "/help") or ""
    for name in ("/add", "/edit", "/delete", "/list", "/reload", "/status"):
        assert name in text


def test_add_with_title_and_with_prompt(state: AppState) -> None:
    assert registry.handle(state, "/add Buy milk") == "Added #1: Buy milk"

    prompter = FakePrompter(answers=["Walk the dog"])
    assert registry.handle(state, "/add", prompt=prompter) == "Added #2: Walk the dog"
    assert "What do you want to do?" in prompter.asked[0][0]

    assert [t.title for t in state.task_store.fetch_all()] == ["Buy milk", "Walk the dog"]


def test_add_empty_is_rejected_before_the_store(state: AppState) -> None:
    reply = registry.handle(state, "/add", prompt=FakePrompter(answers=["   "]))
    assert reply == "Nothing added (empty title)."
    assert state.task_store.fetch_all() == []


def test_edit_prompts_with_current_title(state: AppState) -> None:
    state.controller.add("Buy milk")
    prompter = FakePrompter(answers=["Buy oat milk"])

    reply = registry.handle(state, "/edit 1", prompt=prompter)

    assert reply == "Updated #1: Buy oat milk"
    assert prompter.asked == [("Edit your item: ", "Buy milk")]
    assert state.controller.titles() == ["Buy oat milk"]


def test_edit_inline_and_unchanged(state: AppState) -> None:
    state.controller.add("Buy milk")

    assert registry.handle(state, "/edit 1 Buy oat milk") == "Updated #1: Buy oat milk"
    assert registry.handle(state, "/e 1 Buy oat milk") == "Nothing changed."
    assert registry.handle(state, "/edit 1", prompt=FakePrompter()) == "Nothing changed (empty title)."


def test_bad_row_numbers_are_reported(state: AppState) -> None:
    state.controller.add("A")

    assert "row number is required" in (registry.handle(state, "/edit") or "")
    assert "not a row number" in (registry.handle(state, "/delete one") or "")
    assert "no task at row 5" in (registry.handle(state, "/edit 5 x") or "")


def test_delete_needs_explicit_yes(state: AppState) -> None:
    state.controller.add("Buy milk")

    no = FakePrompter(confirms=[False])
    assert registry.handle(state, "/delete 1", prompt=no) == "Kept."
    assert no.confirmed == ['Delete "Buy milk"?']
    assert registry.handle(state, "/rm 1") == "Kept."
    assert state.controller.titles() == ["Buy milk"]

    yes = FakePrompter(confirms=[True])
    assert registry.handle(state, "/del 1", prompt=yes) == "Deleted: Buy milk"
    assert state.controller.titles() == []
    assert state.task_store.fetch_all() == []


def test_delete_without_confirmation_setting(state: AppState) -> None:
    state.settings.confirm_delete = False
    state.controller.add("A")

    assert registry.handle(state, "/delete 1") == "Deleted: A"


def test_store_errors_become_user_visible_replies(state: AppState) -> None:
    store = FailingTaskStore(state.task_store)
    state.controller = TaskListController(store)
    state.controller.add("A")
    store.fail("update", StorageWriteError("update failed: disk I/O error"))

    reply = registry.handle(state, "/edit 1 A2") or ""

    assert reply.startswith("Could not save task:")
    assert "Nothing was changed" in reply
    assert state.controller.titles() == ["A"]


def test_vanished_task_reply(state: AppState) -> None:
    task = state.controller.add("A")
    state.task_store.delete(task.id)

    reply = registry.handle(state, "/edit 1 A2") or ""

    assert "no longer exists" in reply
    assert state.controller.titles() == []


def test_list_reload_and_status(state: AppState) -> None:
    assert registry.handle(state, "/list") == "No tasks yet. Type a title (or /add) to create one."

    state.task_store.create("Made elsewhere")
    assert registry.handle(state, "/ls") == render_list(state)
    assert "Made elsewhere" not in render_list(state)

    state.load_error = "Could not read tasks"
    reloaded = registry.handle(state, "/reload") or ""
    assert "1. Made elsewhere" in reloaded
    assert state.load_error is None

    status = registry.handle(state, "/status") or ""
    assert f"Backend: {state.task_store.backend_name}" in status
    assert "Tasks: 1" in status


def test_render_list_aligns_row_numbers(state: AppState) -> None:
    for i in range(10):
        state.controller.add(f"t{i}")

    lines = render_list(state).splitlines()

    assert lines[0] == "Task List:"
    assert lines[1] == "   1. t0"
    assert lines[10] == "  10. t9"


def test_inline_titles_keep_their_spacing(state: AppState) -> None:
    assert registry.handle(state, "/add a   b") == "Added #1: a   b"
    assert registry.handle(state, "/add", prompt=FakePrompter(answers=["c   d"])) == "Added #2: c   d"
    assert registry.handle(state, "/edit  1   x  y") == "Updated #1: x  y"

    assert [t.title for t in state.task_store.fetch_all()] == ["x  y", "c   d"]


def test_unknown_command_explains_how_to_add_slash_titles(state: AppState) -> None:
    reply = registry.handle(state, "/tmp cleanup") or ""

    assert reply.startswith("Unknown command: /tmp.")
    assert "/add /tmp" in reply
    assert "starts with '/'" in (registry.handle(state, "/help") or "")

    assert registry.handle(state, "/add /tmp cleanup") == "Added #1: /tmp cleanup"
