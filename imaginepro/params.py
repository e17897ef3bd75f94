"""
ImaginePro Request Parameters

Typed request bodies for every submission endpoint. Python attributes are
snake_case; `to_dict()` produces the camelCase body the API expects.

Every request carries the shared pass-through fields of BaseParams:
- ref: Reference id echoed back to the webhook and in status snapshots
- webhook_override: Webhook URL for generation result callbacks
- timeout: Server-side job timeout in seconds
- disable_cdn: Whether to return origin URLs instead of CDN URLs

Only fields the caller actually set are written to the body.
"""

import json
from dataclasses import asdict, dataclass, field
from typing import Optional, List, Dict, Any

from .buttons import Button, ButtonLike, button_value, upscale_button, variant_button


DEFAULT_MULTI_MODAL_MODEL = "nano-banana"


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


@dataclass(kw_only=True)
class BaseParams:
    """Pass-through fields shared by every submission"""
    ref: Optional[str] = None
    webhook_override: Optional[str] = None
    timeout: Optional[int] = None
    disable_cdn: Optional[bool] = None

    def base_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "ref": self.ref,
            "webhookOverride": self.webhook_override,
            "timeout": self.timeout,
            "disableCdn": self.disable_cdn,
        })

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API request"""
        return self.base_dict()

    def to_json(self) -> str:
        """Convert to JSON string for API request"""
        return json.dumps(self.to_dict(), ensure_ascii=False)


def extract_base_params(params: Any) -> BaseParams:
    """
    Copy the shared pass-through fields out of a richer params object

    Every convenience operation builds its delegated request through this
    helper so that ref / webhook_override / timeout / disable_cdn are
    forwarded if and only if the caller set them.
    """
    return BaseParams(
        ref=getattr(params, "ref", None),
        webhook_override=getattr(params, "webhook_override", None),
        timeout=getattr(params, "timeout", None),
        disable_cdn=getattr(params, "disable_cdn", None),
    )


def _base_kwargs(params: Any) -> Dict[str, Any]:
    return asdict(extract_base_params(params))


@dataclass
class ImagineParams(BaseParams):
    """Text-to-image request"""
    prompt: str

    def to_dict(self) -> Dict[str, Any]:
        data = {"prompt": self.prompt}
        data.update(self.base_dict())
        return data


@dataclass
class ContentBlock:
    """One entry of a multi-modal request: an image reference or a text instruction"""
    type: str
    url: Optional[str] = None
    text: Optional[str] = None

    @classmethod
    def image(cls, url: str) -> "ContentBlock":
        return cls(type="image", url=url)

    @classmethod
    def text_block(cls, text: str) -> "ContentBlock":
        return cls(type="text", text=text)

    def to_dict(self) -> Dict[str, Any]:
        if self.type == "image":
            return {"type": "image", "url": self.url}
        return {"type": "text", "text": self.text}


@dataclass
class MultiModalParams(BaseParams):
    """
    Multi-modal edit request

    Required parameters:
    - contents: Ordered image references and text instructions

    Optional parameters:
    - model: Model selector (default: "nano-banana")
    """
    contents: List[ContentBlock] = field(default_factory=list)
    model: str = DEFAULT_MULTI_MODAL_MODEL

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "contents": [c.to_dict() for c in self.contents],
            "model": self.model or DEFAULT_MULTI_MODAL_MODEL,
        }
        data.update(self.base_dict())
        return data


@dataclass
class ButtonPressParams(BaseParams):
    """
    Button press on a finished image job

    Required parameters:
    - message_id: Id of the job the button belongs to
    - button: Button member or raw wire string (e.g. "U1")

    Optional parameters:
    - mask: Base64 mask, used by "Vary (Region)"
    - prompt: Replacement prompt, used by "Vary (Region)"
    """
    message_id: str
    button: ButtonLike
    mask: Optional[str] = None
    prompt: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = _drop_none({
            "messageId": self.message_id,
            "button": button_value(self.button),
            "mask": self.mask,
            "prompt": self.prompt,
        })
        data.update(self.base_dict())
        return data


@dataclass
class UpscaleParams(BaseParams):
    message_id: str
    index: int

    def to_button_press(self) -> ButtonPressParams:
        return ButtonPressParams(
            message_id=self.message_id,
            button=upscale_button(self.index),
            **_base_kwargs(self),
        )


@dataclass
class VariantParams(BaseParams):
    message_id: str
    index: int

    def to_button_press(self) -> ButtonPressParams:
        return ButtonPressParams(
            message_id=self.message_id,
            button=variant_button(self.index),
            **_base_kwargs(self),
        )


@dataclass
class RerollParams(BaseParams):
    message_id: str

    def to_button_press(self) -> ButtonPressParams:
        return ButtonPressParams(
            message_id=self.message_id,
            button=Button.REROLL,
            **_base_kwargs(self),
        )


@dataclass
class InpaintingParams(BaseParams):
    """Vary (Region): mask is required, prompt is optional"""
    message_id: str
    mask: str
    prompt: Optional[str] = None

    def to_button_press(self) -> ButtonPressParams:
        return ButtonPressParams(
            message_id=self.message_id,
            button=Button.VARY_REGION,
            mask=self.mask,
            prompt=self.prompt,
            **_base_kwargs(self),
        )


@dataclass
class VideoGenerateParams(BaseParams):
    """
    Video generation request

    Required parameters:
    - prompt: Text prompt for the animation
    - start_frame_url: URL of the first frame

    Optional parameters:
    - end_frame_url: URL of the last frame
    """
    prompt: str
    start_frame_url: str
    end_frame_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = _drop_none({
            "prompt": self.prompt,
            "startFrameUrl": self.start_frame_url,
            "endFrameUrl": self.end_frame_url,
        })
        data.update(self.base_dict())
        return data


@dataclass
class VideoExtendParams(BaseParams):
    """Extend one video of a finished video job"""
    message_id: str
    index: int
    animate_mode: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = _drop_none({
            "messageId": self.message_id,
            "index": self.index,
            "animateMode": self.animate_mode,
        })
        data.update(self.base_dict())
        return data
