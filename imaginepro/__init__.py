"""
ImaginePro API Module

A Python client for the ImaginePro image and video generation API.
Supports text-to-image, button actions, multi-modal edits and video jobs,
with status polling until a job is DONE or FAIL.
"""

from .buttons import Button, is_valid_button, parse_button
from .errors import APIError, ImagineProError, PollCancelledError, PollTimeoutError, TransportError
from .imaginepro_client import (
    Endpoints,
    ImagineProClient,
    wait_for_image_completion,
    wait_for_video_completion,
)
from .params import (
    BaseParams,
    ButtonPressParams,
    ContentBlock,
    ImagineParams,
    InpaintingParams,
    MultiModalParams,
    RerollParams,
    UpscaleParams,
    VariantParams,
    VideoExtendParams,
    VideoGenerateParams,
    extract_base_params,
)
from .polling import poll_until_done
from .schemas import ImagineResponse, JobStatus, MessageResponse, VideoMessageResponse, is_terminal
from .settings import Settings, load_settings

__version__ = "1.0.0"
__all__ = [
    "APIError",
    "BaseParams",
    "Button",
    "ButtonPressParams",
    "ContentBlock",
    "Endpoints",
    "ImagineParams",
    "ImagineProClient",
    "ImagineProError",
    "ImagineResponse",
    "InpaintingParams",
    "JobStatus",
    "MessageResponse",
    "MultiModalParams",
    "PollCancelledError",
    "PollTimeoutError",
    "RerollParams",
    "Settings",
    "TransportError",
    "UpscaleParams",
    "VariantParams",
    "VideoExtendParams",
    "VideoGenerateParams",
    "VideoMessageResponse",
    "extract_base_params",
    "is_terminal",
    "is_valid_button",
    "load_settings",
    "parse_button",
    "poll_until_done",
    "wait_for_image_completion",
    "wait_for_video_completion",
]
