"""Candidate selection — first decodable, visually new image per group."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from theme_thumb.core.datatypes import DecodedImage

logger = logging.getLogger(__name__)

# (candidate name, size in device pixels) -> image or None when not found.
Loader = Callable[[str, int], DecodedImage | None]


def select_images(groups: Sequence[Sequence[str]], load: Loader, size: int) -> list[DecodedImage]:
    """Pick at most one image per candidate group.

    Candidates of a group are tried in order until one decodes.  If that
    image is pixel-identical to one already picked, the group is treated as
    redundant and contributes nothing.  Groups without any decodable
    candidate contribute nothing either.

    Args:
        groups: Candidate groups in display order.
        load: Loader resolving a candidate name at a pixel size.
        size: Requested size in device pixels.

    Returns:
        The selected images in group order.
    """
    selected: list[DecodedImage] = []
    for group in groups:
        for name in group:
            image = load(name, size)
            if image is None:
                continue
            if image in selected:
                logger.debug("Candidate '%s' duplicates an earlier image, skipping group %s", name, group[0])
            else:
                selected.append(image)
            break
        else:
            logger.debug("No candidate of group %s could be loaded", group[0] if group else "<empty>")
    return selected
