"""
ImaginePro API Client
Image generation, button actions, multi-modal edits and video generation

API Endpoint: api.imaginepro.ai

Every submission returns a job handle (messageId + status). Job results are
obtained by polling the matching fetch endpoint until the status is DONE or
FAIL; see fetch_message() and fetch_video().

IMPORTANT: This API has costs associated with each request.
Always verify parameters before making actual API calls.
"""

import logging
import threading
from typing import Any, Dict, Optional, Union

import requests
from pydantic import ValidationError

from .buttons import is_valid_button
from .errors import APIError
from .params import (
    ButtonPressParams,
    ImagineParams,
    InpaintingParams,
    MultiModalParams,
    RerollParams,
    UpscaleParams,
    VariantParams,
    VideoExtendParams,
    VideoGenerateParams,
)
from .polling import poll_until_done
from .schemas import ErrorResponse, ImagineResponse, MessageResponse, VideoMessageResponse
from .settings import (
    DEFAULT_BASE_URL,
    DEFAULT_FETCH_INTERVAL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TIMEOUT,
    DEFAULT_VIDEO_TIMEOUT,
    Settings,
    load_settings,
)

logger = logging.getLogger(__name__)


class Endpoints:
    IMAGINE = "/api/v1/nova/imagine"
    GEMINI_IMAGINE = "/api/v1/gemini/imagine"
    UNIVERSAL_IMAGINE = "/api/v1/universal/imagine"
    BUTTON = "/api/v1/nova/button"
    MESSAGE_FETCH = "/api/v1/message/fetch/{message_id}"
    VIDEO_GENERATE = "/api/v1/video/mj/generate"
    VIDEO_EXTEND = "/api/v1/video/mj/extend"
    VIDEO_FETCH = "/api/v1/video/mj/fetch/{message_id}"


def _error_message(body: Any, status_code: int) -> str:
    if isinstance(body, dict):
        try:
            parsed = ErrorResponse.model_validate(body)
        except ValidationError:
            return f"Request failed with status {status_code}"
        if parsed.error:
            return parsed.error
        if isinstance(parsed.message, list) and parsed.message:
            return "; ".join(parsed.message)
        if parsed.message:
            return parsed.message
    return f"Request failed with status {status_code}"


class ImagineProClient:
    """
    Client for the ImaginePro API

    Usage:
        client = ImagineProClient(api_key="your-token")

        handle = client.imagine(ImagineParams(prompt="a cat"))
        result = client.fetch_message(handle.messageId)

        if result.status == "DONE":
            print(result.uri)
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        fetch_interval: float = DEFAULT_FETCH_INTERVAL,
        default_timeout: float = DEFAULT_TIMEOUT,
        video_timeout: float = DEFAULT_VIDEO_TIMEOUT,
        request_timeout: Optional[float] = DEFAULT_REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize ImaginePro API client

        Args:
            api_key: Bearer token for API authentication
            base_url: API base URL (default: https://api.imaginepro.ai)
            fetch_interval: Seconds between status checks (default: 2)
            default_timeout: Image polling budget in seconds (default: 1800)
            video_timeout: Video polling budget in seconds (default: 900)
            request_timeout: Per-request socket timeout handed to requests
            session: Optional requests.Session to send requests with
        """
        if not api_key:
            raise ValueError("api_key is required")

        self.api_key = api_key
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.fetch_interval = fetch_interval or DEFAULT_FETCH_INTERVAL
        self.default_timeout = default_timeout or DEFAULT_TIMEOUT
        self.video_timeout = video_timeout or DEFAULT_VIDEO_TIMEOUT
        self.request_timeout = request_timeout

        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({
            'Authorization': f'Bearer {self.api_key}',
            'Content-Type': 'application/json',
        })

    @classmethod
    def from_settings(cls, settings: Settings, session: Optional[requests.Session] = None) -> "ImagineProClient":
        return cls(
            api_key=settings.require_api_key(),
            base_url=settings.base_url,
            fetch_interval=settings.fetch_interval,
            default_timeout=settings.default_timeout,
            video_timeout=settings.video_timeout,
            request_timeout=settings.request_timeout,
            session=session,
        )

    @classmethod
    def from_env(cls, env_file: Optional[str] = ".env.local") -> "ImagineProClient":
        return cls.from_settings(load_settings(env_file))

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "ImagineProClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        """
        Send exactly one request and return the parsed JSON body

        Raises:
            APIError: If the response status is not 2xx
            requests.RequestException: If the request could not be completed
        """
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, json=body, timeout=self.request_timeout)
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise

        if not response.ok:
            try:
                error_body = response.json()
            except ValueError:
                error_body = response.text
            message = _error_message(error_body, response.status_code)
            status_code = response.status_code
            if isinstance(error_body, dict) and isinstance(error_body.get("statusCode"), int):
                status_code = error_body["statusCode"]
            logger.error("%s %s returned %s: %s", method, path, response.status_code, message)
            raise APIError(message, status_code=status_code, body=error_body)

        return response.json()

    def _post(self, path: str, body: Dict[str, Any]) -> ImagineResponse:
        data = self._request("POST", path, body)
        handle = ImagineResponse.model_validate(data)
        logger.info("Submitted %s -> message %s (%s)", path, handle.messageId, handle.success)
        return handle

    # ------------------------------------------------------------------
    # Image jobs
    # ------------------------------------------------------------------

    def imagine(self, params: ImagineParams) -> ImagineResponse:
        """Submit a text-to-image job"""
        return self._post(Endpoints.IMAGINE, params.to_dict())

    def multi_modal_edit(self, params: MultiModalParams) -> ImagineResponse:
        """
        Submit a multi-modal edit job

        Args:
            params: Ordered image/text content blocks plus optional model

        Returns:
            Job handle; poll it with fetch_message()
        """
        return self._post(Endpoints.UNIVERSAL_IMAGINE, params.to_dict())

    def legacy_multi_modal_edit(self, params: MultiModalParams) -> ImagineResponse:
        """Same as multi_modal_edit() against the older /gemini/imagine route"""
        return self._post(Endpoints.GEMINI_IMAGINE, params.to_dict())

    def press_button(self, params: ButtonPressParams) -> ImagineResponse:
        """
        Press a follow-up button on a finished image job

        The button is sent as given; call validate_request() first to check
        it against the button table.
        """
        return self._post(Endpoints.BUTTON, params.to_dict())

    def upscale(self, params: UpscaleParams) -> ImagineResponse:
        """Press U{index}"""
        return self.press_button(params.to_button_press())

    def variant(self, params: VariantParams) -> ImagineResponse:
        """Press V{index}"""
        return self.press_button(params.to_button_press())

    def reroll(self, params: RerollParams) -> ImagineResponse:
        return self.press_button(params.to_button_press())

    def inpainting(self, params: InpaintingParams) -> ImagineResponse:
        """
        Vary (Region) with a mask

        Raises:
            ValueError: If mask is empty
        """
        if not params.mask:
            raise ValueError("mask is required for inpainting")
        return self.press_button(params.to_button_press())

    def fetch_message_once(self, message_id: str) -> MessageResponse:
        """Query the status of an image job once, without interpreting it"""
        data = self._request("GET", Endpoints.MESSAGE_FETCH.format(message_id=message_id))
        snapshot = MessageResponse.model_validate(data)
        logger.debug("Message %s status: %s progress: %s", message_id, snapshot.status, snapshot.progress)
        return snapshot

    def fetch_message(
        self,
        message_id: str,
        interval: Optional[float] = None,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> MessageResponse:
        """
        Poll an image job until DONE or FAIL

        Args:
            message_id: Job id from a submission
            interval: Seconds between checks (default: client fetch_interval)
            timeout: Total budget in seconds (default: client default_timeout)
            cancel_event: Optional event that stops polling when set

        Returns:
            Terminal snapshot. FAIL is returned, not raised.

        Raises:
            PollTimeoutError: If the job is still running after `timeout`
        """
        return poll_until_done(
            self.fetch_message_once,
            message_id,
            interval=self.fetch_interval if interval is None else interval,
            timeout=self.default_timeout if timeout is None else timeout,
            cancel_event=cancel_event,
        )

    # ------------------------------------------------------------------
    # Video jobs
    # ------------------------------------------------------------------

    def generate_video(self, params: VideoGenerateParams) -> ImagineResponse:
        """
        Generate a video from a prompt and start (and optional end) frame

        Note:
            This operation has costs. Verify parameters before calling.
        """
        return self._post(Endpoints.VIDEO_GENERATE, params.to_dict())

    def extend_video(self, params: VideoExtendParams) -> ImagineResponse:
        return self._post(Endpoints.VIDEO_EXTEND, params.to_dict())

    def fetch_video_once(self, message_id: str) -> VideoMessageResponse:
        data = self._request("GET", Endpoints.VIDEO_FETCH.format(message_id=message_id))
        snapshot = VideoMessageResponse.model_validate(data)
        logger.debug("Video %s status: %s progress: %s", message_id, snapshot.status, snapshot.progress)
        return snapshot

    def fetch_video(
        self,
        message_id: str,
        interval: Optional[float] = None,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> VideoMessageResponse:
        """Poll a video job until DONE or FAIL (default budget: video_timeout)"""
        return poll_until_done(
            self.fetch_video_once,
            message_id,
            interval=self.fetch_interval if interval is None else interval,
            timeout=self.video_timeout if timeout is None else timeout,
            cancel_event=cancel_event,
        )

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_request(
        self,
        params: Union[
            ImagineParams, MultiModalParams, ButtonPressParams, UpscaleParams, VariantParams,
            RerollParams, InpaintingParams, VideoGenerateParams, VideoExtendParams,
        ],
    ) -> tuple[bool, Optional[str]]:
        """
        Validate request parameters before sending

        Args:
            params: Any request parameter object

        Returns:
            Tuple of (is_valid, error_message)
        """
        if isinstance(params, (ImagineParams, VideoGenerateParams)) and not params.prompt.strip():
            return False, "prompt is required"

        if isinstance(params, VideoGenerateParams) and not params.start_frame_url:
            return False, "start_frame_url is required"

        if isinstance(params, MultiModalParams):
            if not params.contents:
                return False, "contents must not be empty"
            for block in params.contents:
                if block.type == "image" and not block.url:
                    return False, "image content block requires url"
                if block.type == "text" and not block.text:
                    return False, "text content block requires text"
                if block.type not in ("image", "text"):
                    return False, f"unknown content block type: {block.type}"

        if hasattr(params, "message_id") and not params.message_id:
            return False, "message_id is required"

        if isinstance(params, ButtonPressParams) and not is_valid_button(params.button):
            return False, f"unknown button: {params.button!r}"

        if isinstance(params, InpaintingParams) and not params.mask:
            return False, "mask is required"

        if isinstance(params, (UpscaleParams, VariantParams)) and not 1 <= params.index <= 4:
            return False, "index must be between 1 and 4"

        return True, None


# Helper functions for common use cases

def wait_for_image_completion(
    client: ImagineProClient,
    message_id: str,
    timeout: Optional[float] = None,
    poll_interval: Optional[float] = None,
) -> MessageResponse:
    """
    Poll image status until DONE/FAIL or timeout

    Example:
        handle = client.imagine(ImagineParams(prompt="a cat"))
        result = wait_for_image_completion(client, handle.messageId, timeout=600)
        print(result.uri)
    """
    return client.fetch_message(message_id, interval=poll_interval, timeout=timeout)


def wait_for_video_completion(
    client: ImagineProClient,
    message_id: str,
    timeout: Optional[float] = None,
    poll_interval: Optional[float] = None,
) -> VideoMessageResponse:
    """Poll video status until DONE/FAIL or timeout"""
    return client.fetch_video(message_id, interval=poll_interval, timeout=timeout)
