"""System tray state: watcher registry, menu layouts, icons and tray events."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence, Tuple, Union

WATCHER_NAME = "org.kde.StatusNotifierWatcher"
WATCHER_OBJECT_PATH = "/StatusNotifierWatcher"
DEFAULT_ITEM_PATH = "/StatusNotifierItem"


@dataclass(frozen=True)
class Icon:
    """A tray icon pixmap; ``data`` holds four bytes per pixel."""

    width: int
    height: int
    data: bytes


def argb_to_rgba(data: bytes) -> bytes:
    """Reorder every complete 4-byte ARGB pixel to RGBA.

    Trailing bytes that do not form a whole pixel are kept as they are.
    """
    whole = len(data) - len(data) % 4
    out = bytearray()
    for start in range(0, whole, 4):
        pixel = data[start:start + 4]
        out += pixel[1:] + pixel[:1]
    out += data[whole:]
    return bytes(out)


def largest_icon(icons: Iterable[Icon]) -> Optional[Icon]:
    """The icon with the greatest (width, height); the last one wins ties."""
    best: Optional[Icon] = None
    for icon in icons:
        if best is None or (icon.width, icon.height) >= (best.width, best.height):
            best = icon
    return best


def _rgba_pixmap(icons: Iterable[Icon]) -> Optional[Icon]:
    icon = largest_icon(icons)
    if icon is None:
        return None
    return Icon(icon.width, icon.height, argb_to_rgba(icon.data))


def split_item_name(name: str) -> Tuple[str, str]:
    """Split a registered item name into bus destination and object path."""
    index = name.find("/")
    if index >= 0:
        return name[:index], name[index:]
    return name, DEFAULT_ITEM_PATH


def _optional(props: Mapping[str, Any], key: str, kind: type) -> Any:
    value = props.get(key)
    if value is None:
        return None
    if kind is int and isinstance(value, bool):
        raise TypeError(f"menu property {key!r} must be int, got bool")
    if not isinstance(value, kind):
        raise TypeError(
            f"menu property {key!r} must be {kind.__name__}, got {type(value).__name__}"
        )
    return value


@dataclass(frozen=True)
class LayoutProps:
    """The menu item properties the tray uses."""

    children_display: Optional[str] = None
    label: Optional[str] = None
    type_: Optional[str] = None
    toggle_type: Optional[str] = None
    toggle_state: Optional[int] = None

    @classmethod
    def from_dict(cls, props: Mapping[str, Any]) -> "LayoutProps":
        """Read known properties from a menu property map; others are ignored."""
        return cls(
            children_display=_optional(props, "children-display", str),
            label=_optional(props, "label", str),
            type_=_optional(props, "type", str),
            toggle_type=_optional(props, "toggle-type", str),
            toggle_state=_optional(props, "toggle-state", int),
        )


@dataclass(frozen=True)
class Layout:
    """A menu node: its id, properties and child nodes."""

    id: int
    props: LayoutProps = field(default_factory=LayoutProps)
    children: Tuple["Layout", ...] = ()

    @classmethod
    def from_dbus(cls, raw: Any) -> "Layout":
        """Build a layout from an ``(id, props, children)`` structure.

        Children may be layouts, raw triples, or ``(signature, triple)`` variant pairs.
        """
        if isinstance(raw, Layout):
            return raw
        if not isinstance(raw, (tuple, list)) or len(raw) != 3:
            raise ValueError(f"menu layout must be (id, props, children): {raw!r}")
        node_id, props, children = raw
        if isinstance(node_id, bool) or not isinstance(node_id, int):
            raise TypeError(f"menu layout id must be int: {node_id!r}")
        if isinstance(props, LayoutProps):
            parsed_props = props
        elif isinstance(props, Mapping):
            parsed_props = LayoutProps.from_dict(props)
        else:
            raise TypeError(f"menu layout props must be a mapping: {props!r}")
        return cls(
            id=node_id,
            props=parsed_props,
            children=tuple(cls._child(child) for child in children),
        )

    @classmethod
    def _child(cls, child: Any) -> "Layout":
        if isinstance(child, (tuple, list)) and len(child) == 2:
            return cls.from_dbus(child[1])
        return cls.from_dbus(child)


@dataclass
class StatusNotifierWatcher:
    """Registry of tray items, keyed by the bus connection that registered them."""

    items: list[Tuple[str, str]] = field(default_factory=list)

    is_status_notifier_host_registered = True
    protocol_version = 0

    def register_item(self, service: str, sender: str) -> str:
        """Record an item and return the service name to announce.

        A service given as an object path is prefixed with the sender's name.
        """
        if not sender:
            raise ValueError("item registration has no sender")
        full = f"{sender}{service}" if service.startswith("/") else service
        self.items.append((sender, full))
        return full

    def owner_vanished(self, sender: str) -> Optional[str]:
        """Drop the first item registered by ``sender``; return its service name."""
        for index, (owner, _) in enumerate(self.items):
            if owner == sender:
                return self.items.pop(index)[1]
        return None

    def registered_items(self) -> list[str]:
        return [service for _, service in self.items]


@dataclass
class StatusNotifierItem:
    """A tray item with its RGBA icon and menu."""

    name: str
    menu: Layout
    icon_pixmap: Optional[Icon] = None

    @classmethod
    def from_pixmaps(
        cls, name: str, menu: Layout, pixmaps: Sequence[Icon] = ()
    ) -> "StatusNotifierItem":
        """Item whose icon is the largest ARGB pixmap, converted to RGBA."""
        return cls(name=name, menu=menu, icon_pixmap=_rgba_pixmap(pixmaps))


@dataclass(frozen=True)
class Registered:
    item: StatusNotifierItem


@dataclass(frozen=True)
class IconChanged:
    name: str
    icon: Icon


@dataclass(frozen=True)
class MenuLayoutChanged:
    name: str
    layout: Layout


@dataclass(frozen=True)
class Unregistered:
    name: str


TrayEvent = Union[Registered, IconChanged, MenuLayoutChanged, Unregistered, None]


@dataclass
class TrayData:
    """The tray items currently shown."""

    items: list[StatusNotifierItem] = field(default_factory=list)

    def __iter__(self) -> Iterator[StatusNotifierItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def find(self, name: str) -> Optional[StatusNotifierItem]:
        return next((item for item in self.items if item.name == name), None)

    def update(self, event: TrayEvent) -> None:
        """Apply a tray event; ``None`` is a no-op event."""
        if event is None:
            return
        if isinstance(event, Registered):
            for index, item in enumerate(self.items):
                if item.name == event.item.name:
                    self.items[index] = event.item
                    return
            self.items.append(event.item)
        elif isinstance(event, IconChanged):
            item = self.find(event.name)
            if item is not None:
                item.icon_pixmap = event.icon
        elif isinstance(event, MenuLayoutChanged):
            item = self.find(event.name)
            if item is not None:
                item.menu = event.layout
        elif isinstance(event, Unregistered):
            self.items = [item for item in self.items if item.name != event.name]
        else:
            raise TypeError(f"unknown tray event: {event!r}")