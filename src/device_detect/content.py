"""
Device-specific content selection.

Mobile and tablet clients get a link they can open directly, desktop clients
get a QR code to scan with their phone.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .types import DeviceState


class ContentKind(Enum):
    PLACEHOLDER = "placeholder"
    LINK = "link"
    QR_CODE = "qr_code"


@dataclass
class ContentChoice:
    kind: ContentKind
    url: Optional[str] = None
    message: str = ""


def select_content(state: DeviceState, url: str) -> ContentChoice:
    """
    Choose what to render for a published device state.

    Raises:
        AssertionError: if the state is neither mobile/tablet nor desktop
    """
    if state.is_loading:
        return ContentChoice(kind=ContentKind.PLACEHOLDER, message="Loading")

    if state.is_mobile_or_tablet:
        device = 'mobile' if state.is_mobile else 'tablet'
        return ContentChoice(
            kind=ContentKind.LINK,
            url=url,
            message=f"You're using a {device} device.",
        )
    elif state.is_desktop:
        return ContentChoice(
            kind=ContentKind.QR_CODE,
            url=url,
            message="You're using a desktop device.",
        )

    raise AssertionError("Device type not detected")
