"""
Layer composition for muscle diagrams.

Every valid muscle silhouette is tinted on a worker thread, then the tinted
layers are alpha-composited onto the base body image in request order:
primary muscles first, secondary muscles on top, later entries above
earlier ones within each group.
"""

from __future__ import annotations

import asyncio
import io
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from PIL import Image, ImageOps

from .muscles import MuscleGroup, MuscleValidator, split_identifiers
from .utils.assets import AssetCatalog

LOG = logging.getLogger(__name__)

Color = Tuple[int, int, int]

PNG_MEDIA_TYPE = "image/png"
HIGH_BIT_DEPTH_MODES = ("I", "I;16", "I;16B", "I;16L", "I;16N")
_COMPONENT_RE = re.compile(r"[0-9]{1,3}")
DEFAULT_PRIMARY_COLOR: Color = (255, 152, 0)
DEFAULT_SECONDARY_COLOR: Color = (255, 211, 144)


class RenderError(RuntimeError):
    """Base class for render related errors."""


class BaseImageError(RenderError):
    """Raised when the base canvas cannot be read or decoded."""


class InvalidColor(RenderError, ValueError):
    """Raised when a colour is not three integer components in 0..255."""


def parse_color(raw: Union[str, Sequence[int]]) -> Color:
    """
    Parse ``"R,G,B"`` (or a three item sequence) into a colour triple.
    """

    tokens = raw.split(",") if isinstance(raw, str) else list(raw)
    if len(tokens) != 3:
        raise InvalidColor(f"Expected three comma separated components, got {raw!r}")

    components: List[int] = []
    for token in tokens:
        text = str(token).strip()
        if not _COMPONENT_RE.fullmatch(text):
            raise InvalidColor(f"Color component {token!r} is not an integer")
        value = int(text)
        if not 0 <= value <= 255:
            raise InvalidColor(f"Color component {value} is outside 0..255")
        components.append(value)
    return components[0], components[1], components[2]


@dataclass(frozen=True)
class Layer:
    muscle: MuscleGroup
    color: Color
    path: Path


@dataclass(frozen=True)
class RenderRequest:
    primary_muscles: Tuple[str, ...] = ()
    secondary_muscles: Tuple[str, ...] = ()
    primary_color: Color = DEFAULT_PRIMARY_COLOR
    secondary_color: Color = DEFAULT_SECONDARY_COLOR
    transparent_base: bool = False

    @classmethod
    def from_strings(
        cls,
        *,
        primary_muscles: str = "",
        secondary_muscles: str = "",
        primary_color: str = "255,152,0",
        secondary_color: str = "255,211,144",
        transparent: str = "0",
    ) -> "RenderRequest":
        return cls(
            primary_muscles=tuple(split_identifiers(primary_muscles)),
            secondary_muscles=tuple(split_identifiers(secondary_muscles)),
            primary_color=parse_color(primary_color),
            secondary_color=parse_color(secondary_color),
            transparent_base=transparent == "1",
        )


@dataclass(frozen=True)
class RenderResult:
    content: bytes
    media_type: str = PNG_MEDIA_TYPE


def tint_image(image: Image.Image, color: Color) -> Image.Image:
    """
    Recolour ``image`` toward ``color`` while keeping its shape.

    Luminance is remapped so mid grey lands on ``color``; black and white
    are kept. The alpha channel is carried over unchanged.
    """

    rgba = image.convert("RGBA")
    alpha = rgba.getchannel("A")
    luminance = rgba.convert("L")
    tinted = ImageOps.colorize(luminance, black=(0, 0, 0), white=(255, 255, 255), mid=color)
    tinted = tinted.convert("RGBA")
    tinted.putalpha(alpha)
    return tinted


def _fit_to_canvas(layer: Image.Image, size: Tuple[int, int]) -> Image.Image:
    if layer.size == size:
        return layer
    # Centre on the canvas; oversized layers are clipped.
    fitted = Image.new("RGBA", size, (0, 0, 0, 0))
    offset = ((size[0] - layer.width) // 2, (size[1] - layer.height) // 2)
    fitted.paste(layer, offset)
    return fitted


def _to_eight_bit(image: Image.Image) -> Image.Image:
    if image.mode not in HIGH_BIT_DEPTH_MODES:
        return image
    # 16-bit grey would clip to white under a plain convert().
    return image.convert("I").point(lambda value: value * (1 / 257)).convert("L")


def composite_layers(base: Image.Image, layers: Sequence[Image.Image]) -> Image.Image:
    """
    Alpha-composite ``layers`` onto ``base`` in sequence order.

    With no layers the base is returned untouched, whatever its mode.
    """

    if not layers:
        return base

    canvas = _to_eight_bit(base).convert("RGBA")
    for layer in layers:
        canvas.alpha_composite(_fit_to_canvas(layer.convert("RGBA"), canvas.size))

    if "A" not in base.getbands() and "transparency" not in base.info:
        canvas = canvas.convert("RGB")
    return canvas


def encode_png(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def load_base_image(path: Path) -> Image.Image:
    try:
        with Image.open(path) as source:
            source.load()
            return source.copy()
    except (OSError, ValueError) as exc:
        raise BaseImageError(f"Failed to load base image {path.name}: {exc}") from exc


def load_tinted_layer(layer: Layer) -> Optional[Image.Image]:
    """
    Read and tint a single muscle layer.

    A file that vanished since validation drops the layer; any other decode
    failure propagates.
    """

    try:
        with Image.open(layer.path) as source:
            source.load()
            return tint_image(source, layer.color)
    except FileNotFoundError:
        LOG.warning("Image file not found for muscle: %s", layer.muscle.value)
        return None


class LayerCompositor:
    """
    Render :class:`RenderRequest` objects against a fixed asset catalog.
    """

    def __init__(self, catalog: AssetCatalog, validator: Optional[MuscleValidator] = None) -> None:
        self.catalog = catalog
        self.validator = validator or MuscleValidator(catalog.muscles)

    def resolve_layers(self, request: RenderRequest) -> List[Layer]:
        """
        Validate the requested muscles, keeping request order.
        """

        layers: List[Layer] = []
        groups = (
            (request.primary_muscles, request.primary_color),
            (request.secondary_muscles, request.secondary_color),
        )
        for identifiers, color in groups:
            for identifier in identifiers:
                path = self.validator.validate(identifier)
                if path is None:
                    continue
                layers.append(Layer(muscle=MuscleGroup(identifier), color=color, path=path))
        return layers

    async def render(self, request: RenderRequest) -> RenderResult:
        layers = self.resolve_layers(request)
        base_path = self.catalog.base_for(request.transparent_base)
        LOG.debug(
            "Rendering %d layer(s) onto %s",
            len(layers),
            base_path.name,
        )

        # gather() keeps submission order, which is the stacking order.
        base, *tinted = await asyncio.gather(
            asyncio.to_thread(load_base_image, base_path),
            *(asyncio.to_thread(load_tinted_layer, layer) for layer in layers),
        )

        def _finish() -> bytes:
            composed = composite_layers(base, [image for image in tinted if image is not None])
            return encode_png(composed)

        content = await asyncio.to_thread(_finish)
        return RenderResult(content=content)

    def render_sync(self, request: RenderRequest) -> RenderResult:
        return asyncio.run(self.render(request))
