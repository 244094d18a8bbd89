import pytest

from vim_overlay.keymaps import (
    ANY_MODE,
    Binding,
    DispatchTable,
    KeyStroke,
    KeymapConflictError,
    ModeSwitch,
    Motion,
    OperatorArm,
    Passthrough,
    Suppress,
    load_default_keymaps,
)
from vim_overlay.runtime.config import DEFAULT_SUPPRESSED_CHARACTERS


def make_table() -> DispatchTable:
    table = DispatchTable(suppressed_characters=DEFAULT_SUPPRESSED_CHARACTERS)
    load_default_keymaps(table)
    return table


def make_binding(
    *,
    binding_id: str,
    mode: str = "normal",
    key: str = "w",
    command: object = Motion("word", 1),
) -> Binding:
    return Binding(id=binding_id, mode=mode, key=key, command=command)  # type: ignore[arg-type]


def test_keystroke_normalizes_aliases_and_modifiers() -> None:
    assert KeyStroke("ESC").key == "Escape"
    assert KeyStroke("<Esc>").key == "Escape"
    assert KeyStroke("A", ("shift",)).modifiers == ()
    assert KeyStroke("v", ("Meta", "ctrl", "ctrl")).modifiers == ("ctrl", "meta")
    assert KeyStroke.parse("ctrl+v").token == "ctrl+v"
    assert KeyStroke.parse("+").key == "+"


def test_keystroke_character_ignores_command_modifiers() -> None:
    assert KeyStroke("x").character == "x"
    assert KeyStroke("x", ("ctrl",)).character is None
    assert KeyStroke("Escape").character is None
    assert KeyStroke("full_stop", text=".").character == "."


def test_register_binding_success() -> None:
    table = DispatchTable()
    binding = make_binding(binding_id="normal.word_forward")

    table.register_binding(binding)

    assert table.stats().binding_count == 1
    assert list(table.iter_bindings(mode="normal")) == [binding]
    assert table.get_binding("normal.word_forward") is binding


def test_register_binding_conflict_detection() -> None:
    table = DispatchTable()
    table.register_binding(make_binding(binding_id="normal.w"))

    with pytest.raises(KeymapConflictError) as excinfo:
        table.register_binding(make_binding(binding_id="normal.w.duplicate"))

    assert [b.id for b in excinfo.value.conflicts] == ["normal.w"]


def test_any_mode_binding_conflicts_with_mode_binding() -> None:
    table = make_table()

    with pytest.raises(KeymapConflictError):
        table.register_binding(
            make_binding(binding_id="normal.escape", key="Escape")
        )


def test_register_binding_replace_removes_conflicts() -> None:
    table = DispatchTable()
    table.register_binding(make_binding(binding_id="normal.w"))
    replacement = make_binding(binding_id="normal.w.v2", command=Suppress())

    table.register_binding(replacement, replace=True)

    assert [b.id for b in table.iter_bindings()] == ["normal.w.v2"]
    assert table.resolve("normal", KeyStroke("w")) == Suppress()


def test_duplicate_id_without_conflict_raises_value_error() -> None:
    table = DispatchTable()
    table.register_binding(make_binding(binding_id="normal.w"))

    with pytest.raises(ValueError):
        table.register_binding(make_binding(binding_id="normal.w", key="e"))


def test_unregister_binding_and_unknown_lookup() -> None:
    table = DispatchTable()
    table.register_binding(make_binding(binding_id="normal.w"))
    revision = table.revision()

    removed = table.unregister_binding("normal.w")

    assert removed is not None and removed.id == "normal.w"
    assert table.unregister_binding("normal.w") is None
    assert table.revision() == revision + 1
    assert table.stats().modes == ()
    with pytest.raises(KeyError):
        table.get_binding("normal.w")


def test_binding_validation() -> None:
    with pytest.raises(ValueError):
        Binding(id="", mode="normal", key=KeyStroke("x"), command=Suppress())
    with pytest.raises(ValueError):
        Binding(id="x", mode="", key=KeyStroke("x"), command=Suppress())


def test_default_table_resolution_in_normal_mode() -> None:
    table = make_table()

    assert table.resolve("normal", KeyStroke("Escape")) == ModeSwitch("normal")
    assert table.resolve("normal", KeyStroke("i")) == ModeSwitch("insert")
    assert table.resolve("normal", KeyStroke("h")) == Motion("char", -1)
    assert table.resolve("normal", KeyStroke("l")) == Motion("char", 1)
    assert table.resolve("normal", KeyStroke("j")) == Motion("line", 1)
    assert table.resolve("normal", KeyStroke("k")) == Motion("line", -1)
    assert table.resolve("normal", KeyStroke("b")) == Motion("word", -1)
    assert table.resolve("normal", KeyStroke("d")) == OperatorArm("d")


def test_default_table_suppresses_printables_only_in_normal_mode() -> None:
    table = make_table()

    for char in ("x", "Z", "7", ";"):
        assert table.resolve("normal", KeyStroke(char)) == Suppress()
        assert table.resolve("insert", KeyStroke(char)) == Passthrough()

    assert table.resolve("normal", KeyStroke("x", ("ctrl",))) == Passthrough()
    assert table.resolve("normal", KeyStroke("Enter")) == Passthrough()
    assert table.resolve("normal", KeyStroke(" ")) == Passthrough()


def test_default_table_insert_mode_only_handles_escape() -> None:
    table = make_table()

    assert table.resolve("insert", KeyStroke("Escape")) == ModeSwitch("normal")
    for key in ("i", "h", "l", "j", "k", "b", "d"):
        assert table.resolve("insert", KeyStroke(key)) == Passthrough()


def test_load_default_keymaps_exclude_and_extras() -> None:
    table = DispatchTable()
    extra = make_binding(
        binding_id="any.ctrl_c",
        mode=ANY_MODE,
        key="ctrl+c",
        command=ModeSwitch("normal"),
    )

    load_default_keymaps(
        table, exclude_bindings=("normal.word_back",), extra_bindings=(extra,)
    )

    ids = {binding.id for binding in table.iter_bindings()}
    assert "normal.word_back" not in ids
    assert "any.ctrl_c" in ids
    assert table.resolve("insert", KeyStroke.parse("ctrl+c")) == ModeSwitch("normal")
