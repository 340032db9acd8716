"""Track which applications use the microphone, camera or screen."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional, Union

WEBCAM_DEVICE_PATH = "/dev/video0"

_VIDEO_CLASS = "Stream/Input/Video"
_AUDIO_CLASS = "Stream/Input/Audio"


class Media(Enum):
    """Kind of media an application stream captures."""

    VIDEO = "video"
    AUDIO = "audio"


@dataclass(frozen=True)
class ApplicationNode:
    """A capturing stream node in the media graph."""

    id: int
    media: Media


@dataclass(frozen=True)
class AddNode:
    node: ApplicationNode


@dataclass(frozen=True)
class RemoveNode:
    id: int


@dataclass(frozen=True)
class WebcamOpen:
    pass


@dataclass(frozen=True)
class WebcamClose:
    pass


PrivacyEvent = Union[AddNode, RemoveNode, WebcamOpen, WebcamClose]


@dataclass
class PrivacyData:
    """Current capture streams and the number of open webcam handles."""

    nodes: list[ApplicationNode] = field(default_factory=list)
    webcam_users: int = 0

    def no_access(self) -> bool:
        return not self.nodes and self.webcam_users == 0

    def microphone_access(self) -> bool:
        return any(node.media is Media.AUDIO for node in self.nodes)

    def webcam_access(self) -> bool:
        return self.webcam_users > 0

    def screenshare_access(self) -> bool:
        return any(node.media is Media.VIDEO for node in self.nodes)

    def update(self, event: PrivacyEvent) -> None:
        """Apply a privacy event to this state."""
        if isinstance(event, AddNode):
            self.nodes.append(event.node)
        elif isinstance(event, RemoveNode):
            self.nodes = [node for node in self.nodes if node.id != event.id]
        elif isinstance(event, WebcamOpen):
            self.webcam_users += 1
        elif isinstance(event, WebcamClose):
            self.webcam_users = max(self.webcam_users - 1, 0)
        else:
            raise TypeError(f"unknown privacy event: {event!r}")


def node_from_global(
    node_id: int, props: Optional[Mapping[str, str]]
) -> Optional[ApplicationNode]:
    """Build a node from a media-graph global, or None if it does not capture."""
    if not props:
        return None
    media_class = props.get("media.class")
    if media_class == _VIDEO_CLASS:
        return ApplicationNode(node_id, Media.VIDEO)
    if media_class == _AUDIO_CLASS:
        return ApplicationNode(node_id, Media.AUDIO)
    return None


def is_device_in_use(target: str, proc_root: str | os.PathLike = "/proc") -> int:
    """Count open file descriptors of all processes that point at ``target``."""
    target_path = Path(target)
    used_by = 0
    try:
        entries = list(Path(proc_root).iterdir())
    except OSError:
        return 0

    for entry in entries:
        fd_dir = entry / "fd"
        if not fd_dir.exists():
            continue
        try:
            descriptors = list(fd_dir.iterdir())
        except OSError:
            continue
        for descriptor in descriptors:
            try:
                link = os.readlink(descriptor)
            except OSError:
                continue
            if Path(link) == target_path:
                used_by += 1
    return used_by


def initial_privacy_data(
    device: str = WEBCAM_DEVICE_PATH, proc_root: str | os.PathLike = "/proc"
) -> PrivacyData:
    """State at start-up: no capture nodes, webcam handles counted from procfs."""
    return PrivacyData(nodes=[], webcam_users=is_device_in_use(device, proc_root))