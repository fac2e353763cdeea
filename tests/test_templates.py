import pytest

from rogulator.content.templates import default_templates, load_templates


def _write_content(tmp_path, monsters=None, items=None, macguffins=None):
    (tmp_path / "monsters.yaml").write_text(
        monsters
        if monsters is not None
        else "- id: bat\n  name: Bat\n  hp: 3\n  damage: 1\n  speed: 0.8\n",
        encoding="utf-8",
    )
    (tmp_path / "items.yaml").write_text(
        items if items is not None else "- id: coin\n  name: Coin\n  type: gold\n  effect: 5\n",
        encoding="utf-8",
    )
    (tmp_path / "macguffins.yaml").write_text(
        macguffins
        if macguffins is not None
        else "- id: orb\n  name: Orb\n  description: Round.\n",
        encoding="utf-8",
    )
    return tmp_path


def test_shipped_content_loads():
    reg = default_templates()
    assert [m.id for m in reg.monster_list()] == ["rat", "goblin", "skeleton"]
    assert len(reg.item_list()) == 7
    assert len(reg.macguffin_list()) == 5
    rat = reg.monster("rat")
    assert rat.hp > 0 and 0.0 <= rat.speed <= 1.0
    assert reg.item("health_potion").type == "consumable"
    assert reg.macguffin("golden_idol").name == "Golden Idol"


def test_default_registry_is_cached():
    assert default_templates() is default_templates()


def test_unknown_template_id_raises_key_error():
    with pytest.raises(KeyError, match="dragon"):
        default_templates().monster("dragon")


def test_custom_content_dir(tmp_path):
    reg = load_templates(_write_content(tmp_path))
    bat = reg.monster("bat")
    assert bat.behavior == "aggressive"
    assert bat.glyph == "m"
    assert reg.item("coin").effect == 5
    assert reg.macguffin("orb").quirk is None


def test_missing_file_raises(tmp_path):
    _write_content(tmp_path)
    (tmp_path / "items.yaml").unlink()
    with pytest.raises(FileNotFoundError):
        load_templates(tmp_path)


@pytest.mark.parametrize(
    "monsters",
    [
        "bat: not-a-list\n",
        "- name: Nameless\n  hp: 1\n",
        "- id: bat\n  hp: 3\n",
        "- id: bat\n  name: Bat\n  hp: 3\n  speed: 1.5\n",
        "- id: bat\n  name: Bat\n  hp: 3\n  behavior: sleepy\n",
    ],
)
def test_malformed_monsters_raise_value_error(tmp_path, monsters):
    with pytest.raises(ValueError):
        load_templates(_write_content(tmp_path, monsters=monsters))


def test_unknown_item_type_raises_value_error(tmp_path):
    bad = "- id: gem\n  name: Gem\n  type: jewel\n"
    with pytest.raises(ValueError, match="jewel"):
        load_templates(_write_content(tmp_path, items=bad))
