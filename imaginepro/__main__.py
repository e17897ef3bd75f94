import argparse
import json
import logging
import sys

from .errors import ImagineProError, TransportError
from .imaginepro_client import ImagineProClient
from .params import ButtonPressParams, ImagineParams, VideoGenerateParams
from .settings import load_settings


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="imaginepro", description="ImaginePro API command line client")
    parser.add_argument("--env-file", default=".env.local", help="Env file to load before reading settings (default: .env.local)")
    parser.add_argument("--log-level", default=None, help="Logging level (default: IMAGINEPRO_LOG_LEVEL or INFO)")
    sub = parser.add_subparsers(dest="command")

    imagine = sub.add_parser("imagine", help="Submit a text-to-image job")
    imagine.add_argument("prompt", help="Prompt text")
    imagine.add_argument("--ref", default=None, help="Reference id echoed back by the API")
    imagine.add_argument("--webhook", default=None, help="Webhook URL override")
    imagine.add_argument("--wait", action="store_true", help="Poll until the job is DONE or FAIL")

    button = sub.add_parser("button", help="Press a button on a finished image job")
    button.add_argument("message_id", help="Message id of the finished job")
    button.add_argument("button", help="Button wire string (e.g. U1, V2, 'Vary (Strong)')")
    button.add_argument("--wait", action="store_true", help="Poll until the job is DONE or FAIL")

    fetch = sub.add_parser("fetch", help="Fetch image job status")
    fetch.add_argument("message_id", help="Message id")
    fetch.add_argument("--wait", action="store_true", help="Poll until the job is DONE or FAIL")
    fetch.add_argument("--timeout", type=float, default=None, help="Polling budget in seconds")

    video = sub.add_parser("video", help="Submit a video generation job")
    video.add_argument("prompt", help="Prompt text")
    video.add_argument("--start-frame", required=True, help="Start frame image URL")
    video.add_argument("--end-frame", default=None, help="End frame image URL")
    video.add_argument("--wait", action="store_true", help="Poll until the job is DONE or FAIL")

    fetch_video = sub.add_parser("fetch-video", help="Fetch video job status")
    fetch_video.add_argument("message_id", help="Message id")
    fetch_video.add_argument("--wait", action="store_true", help="Poll until the job is DONE or FAIL")
    fetch_video.add_argument("--timeout", type=float, default=None, help="Polling budget in seconds")

    return parser.parse_args(argv)


def _print(model) -> None:
    print(json.dumps(model.model_dump(exclude_none=True), indent=2, ensure_ascii=False))


def run(client: ImagineProClient, args: argparse.Namespace) -> int:
    if args.command == "imagine":
        handle = client.imagine(ImagineParams(prompt=args.prompt, ref=args.ref, webhook_override=args.webhook))
        _print(handle)
        if args.wait:
            _print(client.fetch_message(handle.messageId))
        return 0

    if args.command == "button":
        params = ButtonPressParams(message_id=args.message_id, button=args.button)
        ok, error = client.validate_request(params)
        if not ok:
            print(f"Invalid request: {error}", file=sys.stderr)
            return 2
        handle = client.press_button(params)
        _print(handle)
        if args.wait:
            _print(client.fetch_message(handle.messageId))
        return 0

    if args.command == "fetch":
        if args.wait:
            _print(client.fetch_message(args.message_id, timeout=args.timeout))
        else:
            _print(client.fetch_message_once(args.message_id))
        return 0

    if args.command == "video":
        handle = client.generate_video(VideoGenerateParams(
            prompt=args.prompt,
            start_frame_url=args.start_frame,
            end_frame_url=args.end_frame,
        ))
        _print(handle)
        if args.wait:
            _print(client.fetch_video(handle.messageId))
        return 0

    if args.command == "fetch-video":
        if args.wait:
            _print(client.fetch_video(args.message_id, timeout=args.timeout))
        else:
            _print(client.fetch_video_once(args.message_id))
        return 0

    return 2


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = load_settings(args.env_file)
    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        print("No command given. Use --help for usage.", file=sys.stderr)
        return 2

    with ImagineProClient.from_settings(settings) as client:
        try:
            return run(client, args)
        except (ImagineProError, TransportError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1


if __name__ == "__main__":
    sys.exit(main())
