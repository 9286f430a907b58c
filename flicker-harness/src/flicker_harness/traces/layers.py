"""Surface flinger (layers) snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Tuple

from flicker_harness.geometry import Rect, Region
from flicker_harness.traces.component import ComponentMatcher
from flicker_harness.traces.timestamp import EMPTY_TIMESTAMP, Timestamp


@dataclass(frozen=True)
class Layer:
    name: str
    id: int
    parent_id: int = -1
    z: int = 0
    visible_region: Region = field(default_factory=Region)
    is_opaque: bool = True
    is_hidden_by_policy: bool = False

    @property
    def is_visible(self) -> bool:
        return not self.is_hidden_by_policy and self.visible_region.is_not_empty

    def __str__(self) -> str:
        return f"{self.name}#{self.id} {self.visible_region}"


@dataclass(frozen=True)
class Display:
    id: int
    name: str = ""
    layer_stack_space: Rect = field(default_factory=Rect)
    is_on: bool = True
    is_virtual: bool = False


@dataclass(frozen=True)
class LayerTraceEntry:
    timestamp: Timestamp = EMPTY_TIMESTAMP
    layers: Tuple[Layer, ...] = ()
    displays: Tuple[Display, ...] = ()
    vsync_id: int = -1

    def __post_init__(self) -> None:
        object.__setattr__(self, "layers", tuple(self.layers))
        object.__setattr__(self, "displays", tuple(self.displays))

    @property
    def physical_display(self) -> Optional[Display]:
        for display in self.displays:
            if display.is_on and not display.is_virtual:
                return display
        return None

    @property
    def physical_display_bounds(self) -> Optional[Rect]:
        display = self.physical_display
        if display is None:
            return None
        return display.layer_stack_space

    @property
    def visible_layers(self) -> Tuple[Layer, ...]:
        return tuple(layer for layer in self.layers if layer.is_visible)

    def matching_layers(self, component: ComponentMatcher) -> Tuple[Layer, ...]:
        return tuple(layer for layer in self.layers if component.matches(layer.name))

    def get_layer(self, component: ComponentMatcher) -> Optional[Layer]:
        layers = self.matching_layers(component)
        return layers[0] if layers else None

    def children_of(self, layer_id: int) -> Tuple[Layer, ...]:
        return tuple(layer for layer in self.layers if layer.parent_id == layer_id)

    def is_visible(self, component: ComponentMatcher) -> bool:
        return any(layer.is_visible for layer in self.matching_layers(component))

    def contains_layer(self, component: ComponentMatcher) -> bool:
        return bool(self.matching_layers(component))

    def visible_region(self, component: Optional[ComponentMatcher] = None) -> Region:
        """Union of the visible regions of matching layers (all layers if None)."""

        layers: Iterable[Layer]
        if component is None:
            layers = self.visible_layers
        else:
            layers = (layer for layer in self.matching_layers(component) if layer.is_visible)
        region = Region()
        for layer in layers:
            region = region.union(layer.visible_region)
        return region

    def __str__(self) -> str:
        return f"LayerTraceEntry({self.timestamp})"


class LayerTraceEntryBuilder:
    """Builds a LayerTraceEntry from raw (string) clock fields."""

    def __init__(
        self,
        *,
        elapsed_timestamp: "int | str",
        layers: Sequence[Layer] = (),
        displays: Sequence[Display] = (),
        vsync_id: "int | str" = -1,
        real_to_elapsed_time_offset_ns: "int | str | None" = None,
    ) -> None:
        self._elapsed_timestamp = int(str(elapsed_timestamp).strip())
        self._layers = tuple(layers)
        self._displays = tuple(displays)
        self._vsync_id = int(str(vsync_id).strip())
        self._offset: Optional[int] = None
        if real_to_elapsed_time_offset_ns is not None:
            self._offset = int(str(real_to_elapsed_time_offset_ns).strip())

    @property
    def elapsed_timestamp(self) -> int:
        return self._elapsed_timestamp

    @property
    def clock_timestamp(self) -> Optional[int]:
        if self._offset is None:
            return None
        return self._elapsed_timestamp + self._offset

    def build(self) -> LayerTraceEntry:
        timestamp = Timestamp.from_layer_clock(self._elapsed_timestamp, self._offset)
        return LayerTraceEntry(
            timestamp=timestamp,
            layers=self._layers,
            displays=self._displays,
            vsync_id=self._vsync_id,
        )
