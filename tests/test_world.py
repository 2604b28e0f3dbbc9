"""Tests for World and entity management."""

import numpy as np
import pytest

from laplacian_pyramid.components.image import Component, GrayImage
from laplacian_pyramid.core.world import World


class MockComponent(Component):
    """Mock component for testing."""

    value: int


class TestWorld:
    """Tests for World ECS manager."""

    def test_new_entity(self) -> None:
        """Test entity IDs increase monotonically."""
        world = World()
        assert world.new_entity() == 0
        assert world.new_entity() == 1
        assert set(world.metadata) == {0, 1}

    def test_add_and_get_component(self) -> None:
        """Test attaching and retrieving a component."""
        world = World()
        eid = world.new_entity()
        world.add_component(eid, MockComponent(value=42))
        assert world.has_component(eid, MockComponent)
        assert world.get_component(eid, MockComponent).value == 42

    def test_add_component_nonexistent_entity(self) -> None:
        """Test adding component to non-existent entity raises error."""
        world = World()
        with pytest.raises(ValueError, match="Entity .* does not exist"):
            world.add_component(999, MockComponent(value=42))

    def test_get_component_not_present(self) -> None:
        """Test retrieving non-existent component raises KeyError."""
        world = World()
        eid = world.new_entity()
        with pytest.raises(KeyError, match="(does not have component|No entities have component)"):
            world.get_component(eid, MockComponent)

    def test_remove_component(self) -> None:
        """Test removing a component."""
        world = World()
        eid = world.new_entity()
        world.add_component(eid, MockComponent(value=1))
        world.remove_component(eid, MockComponent)
        assert not world.has_component(eid, MockComponent)
        with pytest.raises(KeyError):
            world.remove_component(eid, MockComponent)

    def test_query(self) -> None:
        """Test querying entities by component types."""
        world = World()
        img = np.zeros((13, 13), dtype=np.float32)
        e1 = world.spawn_image(img)
        e2 = world.spawn_image(img)
        world.add_component(e2, MockComponent(value=0))

        assert world.query(GrayImage) == [e1, e2]
        assert world.query(GrayImage, MockComponent) == [e2]
        assert world.query() == [e1, e2]

    def test_destroy_entity(self) -> None:
        """Test destroying an entity removes its components."""
        world = World()
        eid = world.spawn_image(np.zeros((5, 5), dtype=np.float32))
        world.destroy_entity(eid)
        assert not world.has_component(eid, GrayImage)
        assert eid not in world.metadata
        with pytest.raises(ValueError):
            world.destroy_entity(eid)

    def test_clear(self) -> None:
        """Test clear() resets entities and components."""
        world = World()
        world.spawn_image(np.zeros((5, 5), dtype=np.float32))
        world.clear()
        assert world.metadata == {}
        assert world.query(GrayImage) == []
        assert world.new_entity() == 0


class TestSpawn:
    """Tests for image ingestion."""

    def test_spawn_image(self) -> None:
        """Test spawn_image stores a float32 copy and metadata."""
        world = World()
        img = np.arange(25, dtype=np.uint8).reshape(5, 5)
        eid = world.spawn_image(img)

        pix = world.get_component(eid, GrayImage).pix
        assert pix.dtype == np.float32
        np.testing.assert_array_equal(pix, img)
        assert not np.shares_memory(pix, img)
        assert world.metadata[eid]["image_shape"] == (5, 5)
        assert world.metadata[eid]["image_dtype"] == "uint8"

    def test_spawn_image_rejects_color(self) -> None:
        """Test spawn_image requires a 2-D image."""
        with pytest.raises(ValueError, match="Expected image with shape \\(H, W\\)"):
            World().spawn_image(np.zeros((5, 5, 3), dtype=np.float32))

    def test_spawn_image_rejects_bool(self) -> None:
        """Test non-numeric dtypes are rejected."""
        with pytest.raises(ValueError, match="Expected integer or float dtype"):
            World().spawn_image(np.zeros((5, 5), dtype=bool))

    def test_spawn_channels(self) -> None:
        """Test spawn_channels creates one entity per channel."""
        world = World()
        img = np.stack([np.full((5, 7), c, dtype=np.float32) for c in range(3)], axis=-1)
        eids = world.spawn_channels(img)

        assert len(eids) == 3
        for channel, eid in enumerate(eids):
            assert world.metadata[eid]["channel"] == channel
            np.testing.assert_array_equal(world.get_component(eid, GrayImage).pix, channel)

    def test_spawn_channels_rejects_gray(self) -> None:
        """Test spawn_channels requires a 3-D image."""
        with pytest.raises(ValueError, match="\\(H, W, C\\)"):
            World().spawn_channels(np.zeros((5, 5), dtype=np.float32))
