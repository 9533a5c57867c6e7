"""Tests for the Trove command store."""

import pytest

from src.core.commands.errors import InvalidEntityError, NotFoundError
from src.core.commands.models import HoardCommand
from src.core.commands.trove import Collision, Trove
from src.version import __version__


class TestTroveBasics:
    """Test suite for trove construction."""

    def test_empty_trove(self) -> None:
        """Test creating an empty trove."""
        trove = Trove()
        assert trove.is_empty()
        assert len(trove) == 0
        assert trove.version == __version__

    def test_from_commands(self, make_command) -> None:
        """Test building a trove from commands collects namespaces."""
        trove = Trove.from_commands(
            [make_command(namespace="a"), make_command(name="other", namespace="b")]
        )
        assert len(trove) == 2
        assert trove.namespace_index == {"a", "b"}

    def test_get(self, make_command) -> None:
        """Test looking up a command by name."""
        trove = Trove.from_commands(
            [make_command(namespace="a"), make_command(namespace="b", command="ls")]
        )

        assert trove.get("list-files") == make_command(namespace="a")
        assert trove.get("list-files", namespace="b").command == "ls"
        assert trove.get("list-files", namespace="c") is None
        assert trove.get("missing") is None


class TestAdd:
    """Test suite for adding commands."""

    def test_add_invalid_command(self) -> None:
        """Test that invalid commands are rejected without mutation."""
        trove = Trove()
        with pytest.raises(InvalidEntityError):
            trove.add(HoardCommand(), overwrite_on_collision=True)
        assert trove.is_empty()
        assert trove.namespace_index == frozenset()

    def test_add_valid_command(self, make_command) -> None:
        """Test adding a valid command registers its namespace."""
        trove = Trove()
        assert trove.add(make_command(namespace="test"), overwrite_on_collision=True)
        assert not trove.is_empty()
        assert "test" in trove.namespace_index

    def test_add_multiple_namespaces(self, make_command) -> None:
        """Test that every new namespace is registered."""
        trove = Trove()
        trove.add(make_command(name="test1", namespace="test1"))
        trove.add(make_command(name="test2", namespace="test2"))
        assert trove.namespace_index == {"test1", "test2"}

    def test_add_same_namespace_once(self, make_command) -> None:
        """Test that a shared namespace is listed once."""
        trove = Trove()
        trove.add(make_command(name="test1", namespace="test"))
        trove.add(make_command(name="test2", namespace="test"))
        assert trove.namespace_index == {"test"}
        assert trove.namespaces() == ["test"]

    @pytest.mark.parametrize("overwrite", [True, False])
    def test_add_identical_is_idempotent(self, make_command, overwrite) -> None:
        """Test that re-adding an identical command changes nothing."""
        trove = Trove()
        assert trove.add(make_command(), overwrite_on_collision=overwrite)
        assert not trove.add(make_command(usage_count=5), overwrite_on_collision=overwrite)
        assert len(trove) == 1

    def test_add_overwrite_on_collision(self, make_command) -> None:
        """Test that a differing command replaces the stored one."""
        trove = Trove()
        trove.add(make_command(command="ls"))

        assert trove.add(make_command(command="ls -la"), overwrite_on_collision=True)

        assert len(trove) == 1
        assert trove.get("list-files").command == "ls -la"

    def test_add_collision_gets_suffix(self, make_command) -> None:
        """Test that a differing command without overwrite is renamed."""
        trove = Trove()
        first = make_command(command="ls")
        trove.add(first)

        assert trove.add(make_command(command="ls -la"), overwrite_on_collision=False)

        assert len(trove) == 2
        assert first in trove.commands
        renamed = [c for c in trove if c.name != "list-files"]
        assert len(renamed) == 1
        assert renamed[0].name.startswith("list-files-")
        assert len(renamed[0].name) == len("list-files-") + 4
        assert renamed[0].command == "ls -la"

    def test_add_collision_suffix_rerolled(self, make_command, mocker) -> None:
        """Test that a suffix colliding again is drawn anew."""
        trove = Trove()
        trove.add(make_command(command="ls"))
        trove.add(make_command(name="list-files-aaaa", command="ls -a"))
        mocker.patch(
            "src.core.commands.models.random.choices",
            side_effect=[list("aaaa"), list("bbbb")],
        )

        trove.add(make_command(command="ls -R"))

        assert trove.get("list-files-bbbb").command == "ls -R"
        assert trove.get("list-files-aaaa").command == "ls -a"

    def test_same_name_in_other_namespace_is_no_collision(self, make_command) -> None:
        """Test that names are unique per namespace only."""
        trove = Trove()
        trove.add(make_command(namespace="a"))
        trove.add(make_command(namespace="b", command="other"))
        assert len(trove) == 2
        assert {c.name for c in trove} == {"list-files"}


class TestCollision:
    """Test suite for collision lookup."""

    def test_find_collision(self, make_command) -> None:
        """Test finding the command with the same namespace and name."""
        trove = Trove.from_commands([make_command()])
        assert trove.find_collision(make_command(command="ls")) == make_command()
        assert trove.find_collision(make_command(namespace="x")) is None

    def test_check_collision_kinds(self, make_command) -> None:
        """Test the three collision outcomes."""
        trove = Trove.from_commands([make_command()])

        assert trove.check_collision(make_command(name="new")).kind is Collision.NO_COLLISION
        identical = trove.check_collision(make_command())
        assert identical.kind is Collision.IDENTICAL_COLLISION
        assert identical.existing == make_command()
        differing = trove.check_collision(make_command(description="changed"))
        assert differing.kind is Collision.DIFFERING_COLLISION


class TestRemove:
    """Test suite for removing commands."""

    def test_add_and_remove_command(self, make_command) -> None:
        """Test that removal keeps the namespace in the index."""
        trove = Trove()
        trove.add(make_command(name="test", namespace="test"))

        trove.remove("test")

        assert trove.is_empty()
        assert "test" in trove.namespace_index
        assert trove.namespaces() == []

    def test_remove_keeps_shared_namespace(self, make_command) -> None:
        """Test that other commands keep the namespace listed."""
        trove = Trove()
        trove.add(make_command(name="a", namespace="ns"))
        trove.add(make_command(name="b", namespace="ns"))

        trove.remove("a")

        assert trove.namespaces() == ["ns"]

    def test_remove_all_with_name(self, make_command) -> None:
        """Test that every command with the name is removed."""
        trove = Trove()
        trove.add(make_command(namespace="a"))
        trove.add(make_command(namespace="b"))
        trove.add(make_command(name="keep"))

        trove.remove("list-files")

        assert [c.name for c in trove] == ["keep"]

    def test_remove_missing(self, make_command) -> None:
        """Test that removing an unknown name fails without mutation."""
        trove = Trove.from_commands([make_command()])
        with pytest.raises(NotFoundError) as exc_info:
            trove.remove("missing")
        assert exc_info.value.kind == "command"
        assert exc_info.value.key == "missing"
        assert len(trove) == 1

    def test_remove_namespace(self, make_command) -> None:
        """Test removing every command of a namespace."""
        trove = Trove()
        trove.add(make_command(name="a", namespace="work"))
        trove.add(make_command(name="b", namespace="work"))
        trove.add(make_command(name="c", namespace="home"))

        trove.remove_namespace("work")

        assert [c.name for c in trove] == ["c"]
        assert trove.namespaces() == ["home"]

    def test_remove_namespace_missing(self, make_command) -> None:
        """Test that an empty namespace cannot be removed."""
        trove = Trove.from_commands([make_command()])
        with pytest.raises(NotFoundError) as exc_info:
            trove.remove_namespace("missing")
        assert exc_info.value.kind == "namespace"


class TestUpdate:
    """Test suite for replacing stored commands."""

    def test_update(self, make_command) -> None:
        """Test replacing a command by namespace and name."""
        trove = Trove.from_commands([make_command()])
        trove.update(make_command(command="ls -R"))
        assert trove.get("list-files").command == "ls -R"

    def test_update_missing(self, make_command) -> None:
        """Test updating an unknown command."""
        trove = Trove()
        with pytest.raises(NotFoundError):
            trove.update(make_command())


class TestMerge:
    """Test suite for merging troves."""

    def test_merge_adds_new_commands(self, make_command) -> None:
        """Test that new commands and namespaces are merged in."""
        local = Trove.from_commands([make_command(name="a")])
        other = Trove.from_commands([make_command(name="b", namespace="remote")])

        assert local.merge(other)

        assert {c.name for c in local} == {"a", "b"}
        assert local.namespaces() == ["default", "remote"]

    def test_merge_overwrites_collisions(self, make_command) -> None:
        """Test that incoming commands win on collision."""
        local = Trove.from_commands([make_command(command="ls")])
        other = Trove.from_commands([make_command(command="ls -la")])

        assert local.merge(other)

        assert len(local) == 1
        assert local.get("list-files").command == "ls -la"

    def test_merge_is_idempotent(self, make_command) -> None:
        """Test that merging twice equals merging once."""
        local = Trove.from_commands([make_command(name="a")])
        other = Trove.from_commands(
            [make_command(name="a", command="new"), make_command(name="b")]
        )

        assert local.merge(other)
        snapshot = [c.to_dict() for c in local]

        assert not local.merge(other)
        assert [c.to_dict() for c in local] == snapshot

    def test_merge_later_entry_wins(self, make_command) -> None:
        """Test that merge follows the order of the other trove."""
        local = Trove()
        other = Trove(commands=[make_command(command="first"), make_command(command="second")])

        local.merge(other)

        assert local.get("list-files").command == "second"

    def test_merge_skips_invalid(self, make_command) -> None:
        """Test that invalid commands do not stop a merge."""
        local = Trove()
        other = Trove(commands=[HoardCommand(name="broken"), make_command()])

        assert local.merge(other)
        assert [c.name for c in local] == ["list-files"]

    def test_merge_empty(self) -> None:
        """Test that merging an empty trove changes nothing."""
        assert not Trove().merge(Trove())


class TestNamespacesAndQuery:
    """Test suite for namespace listing and queries."""

    def test_trove_namespaces(self, make_command) -> None:
        """Test that namespaces are sorted and deduplicated."""
        trove = Trove()
        trove.add(make_command(name="name1", namespace="NAMESPACE2"))
        trove.add(make_command(name="name2", namespace="NAMESPACE1"))
        trove.add(make_command(name="name3", namespace="NAMESPACE2"))
        assert trove.namespaces() == ["NAMESPACE1", "NAMESPACE2"]

    @pytest.mark.parametrize(
        "term, expected",
        [
            ("docker", {"prune"}),
            ("ops", {"prune", "pods"}),
            ("kubectl", {"pods"}),
            ("clean", {"prune"}),
            ("pods", {"pods"}),
            ("DOCKER", set()),
        ],
    )
    def test_query(self, make_command, term, expected) -> None:
        """Test substring matching across fields."""
        trove = Trove.from_commands(
            [
                make_command(
                    name="prune",
                    namespace="docker",
                    command="docker system prune",
                    description="clean up",
                    tags=("ops",),
                ),
                make_command(
                    name="pods",
                    namespace="k8s",
                    command="kubectl get pods",
                    description="",
                    tags=("ops", "k8s"),
                ),
            ]
        )

        result = trove.query(term)

        assert {c.name for c in result} == expected
        assert len(trove) == 2

    def test_query_returns_new_trove(self, make_command) -> None:
        """Test that query leaves the source trove alone."""
        trove = Trove.from_commands([make_command()])
        result = trove.query("list")
        result.remove("list-files")
        assert len(trove) == 1


class TestTroveSerialization:
    """Test suite for trove dictionary conversion."""

    def test_round_trip(self, make_command) -> None:
        """Test that to_dict/from_dict keeps commands and namespaces."""
        trove = Trove()
        trove.add(make_command(name="a", namespace="gone"))
        trove.add(make_command(name="b", namespace="kept"))
        trove.remove("a")

        restored = Trove.from_dict(trove.to_dict())

        assert restored.version == trove.version
        assert [c.to_dict() for c in restored] == [c.to_dict() for c in trove]
        assert restored.namespace_index == {"gone", "kept"}

    def test_from_dict_adds_command_namespaces(self, make_command) -> None:
        """Test that namespaces of loaded commands are always indexed."""
        data = {"version": "1.0.0", "commands": [make_command(namespace="x").to_dict()]}
        assert Trove.from_dict(data).namespace_index == {"x"}

    def test_from_dict_drops_duplicates_and_invalid(self, make_command) -> None:
        """Test that loading keeps namespace and name unique."""
        data = {
            "version": "1.0.0",
            "commands": [
                make_command(command="first").to_dict(),
                make_command(name="", command="broken").to_dict(),
                make_command(command="second").to_dict(),
                make_command(name="other").to_dict(),
            ],
        }

        trove = Trove.from_dict(data)

        assert len(trove) == 2
        assert trove.get("list-files").command == "second"
        assert [c.name for c in trove] == ["list-files", "other"]
