#!/usr/bin/env python3
"""
Veo Studio - Main Entry Point

Runs Veo generation and extension jobs from the command line, showing the
rotating progress messages while the job is polled.

Usage:
    # Generate a video
    python main.py generate --prompt "A neon hologram of a cat driving at top speed"

    # Keep the operation so it can be extended later
    python main.py generate --prompt "..." --save-operation last.json

    # Extend the saved video by 7 seconds and download the result
    python main.py extend --from last.json --prompt "The cat drifts around a corner" --download ./output
"""

import argparse
import asyncio
import json
import logging
import signal
import sys
from pathlib import Path
from typing import Awaitable, Callable, Optional

from pydantic import ValidationError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("veostudio")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CREDENTIALS = 2


def _install_cancel_handler(cancel_event: asyncio.Event):
    """Ctrl+C / SIGTERM stop polling instead of killing the process."""

    def handle_signal():
        logger.info("Cancelling job...")
        cancel_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            loop.add_signal_handler(sig, handle_signal)
        except NotImplementedError:
            # Windows event loops have no signal handlers
            pass


def _save_operation(operation, path: str):
    Path(path).write_text(json.dumps(operation.to_dict(), indent=2))
    logger.info(f"Operation saved to {path}")


def _load_operation(path: str):
    from services.video_generation import Operation

    data = json.loads(Path(path).read_text())
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object")
    return Operation.from_dict(data)


async def _run_job(
    title: str,
    details: dict,
    job: Callable[..., Awaitable],
    save_operation: Optional[str],
    download_dir: Optional[str],
) -> int:
    """Run generate/extend with progress display and map errors to exit codes."""
    from core.config import get_config
    from cli.progress_display import ProgressDisplay
    from services.video_generation import ErrorKind, VideoGenerationClient, VideoGenerationError

    config = get_config()
    issues = config.validate()
    if issues:
        for issue in issues:
            logger.error(f"Config: {issue}")
        return EXIT_CREDENTIALS if not config.api.gemini_api_key else EXIT_FAILED

    cancel_event = asyncio.Event()
    _install_cancel_handler(cancel_event)

    display = ProgressDisplay(title)
    display.start(details)

    saved_to = None
    async with VideoGenerationClient.from_config(config) as client:
        try:
            operation = await job(client, display, cancel_event)
            if save_operation:
                _save_operation(operation, save_operation)
            if download_dir:
                saved_to = str(await client.download_video(operation.result, output_dir=download_dir))
        except VideoGenerationError as e:
            display.failed(e)
            if e.kind == ErrorKind.CREDENTIAL:
                return EXIT_CREDENTIALS
            return EXIT_FAILED

    display.succeeded(operation, saved_to=saved_to)
    return EXIT_OK


async def generate_video(args: argparse.Namespace) -> int:
    """Generate a new video from the command line arguments."""
    from core.config import get_config
    from services.video_generation import (
        AspectRatio,
        GenerationRequest,
        Resolution,
        VideoEffect,
        VideoModel,
    )

    model = {
        "fast": VideoModel.VEO_3_1_FAST,
        "quality": VideoModel.VEO_3_1,
    }.get(args.model) or VideoModel(get_config().models.default_model)

    request = GenerationRequest(
        prompt=args.prompt,
        aspect_ratio=AspectRatio(args.aspect_ratio),
        resolution=Resolution(args.resolution),
        model=model,
        effect=VideoEffect(args.effect),
    )

    async def job(client, display, cancel_event):
        return await client.generate(request, on_progress=display, cancel_event=cancel_event)

    return await _run_job(
        "Generating video",
        {
            "Prompt": request.final_prompt[:60],
            "Model": request.model.value,
            "Aspect ratio": request.aspect_ratio.value,
            "Resolution": request.resolution.value,
        },
        job,
        args.save_operation,
        args.download,
    )


async def extend_video(args: argparse.Namespace) -> int:
    """Extend a previously saved operation's video."""
    from services.video_generation import ExtensionRequest

    try:
        prior = _load_operation(args.source)
    except (OSError, KeyError, TypeError, ValueError) as e:
        logger.error(f"Cannot load operation from {args.source}: {type(e).__name__}: {e}")
        return EXIT_FAILED

    request = ExtensionRequest(
        prompt=args.prompt,
        duration_seconds=args.duration,
        prior_operation=prior,
    )

    async def job(client, display, cancel_event):
        return await client.extend(request, on_progress=display, cancel_event=cancel_event)

    return await _run_job(
        "Extending video",
        {
            "Prompt": request.prompt[:60],
            "From": prior.name,
            "Duration": f"{request.duration_seconds}s",
        },
        job,
        args.save_operation or args.source,
        args.download,
    )


def main():
    from services.video_generation import AspectRatio, Resolution, VideoEffect

    parser = argparse.ArgumentParser(
        description="Veo Studio - generate and extend videos with Veo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Generate a portrait video in 1080p
    python main.py generate -p "A lighthouse in a storm" --aspect-ratio 9:16 --resolution 1080p

    # Generate and keep the operation for a later extension
    python main.py generate -p "A lighthouse in a storm" --save-operation last.json

    # Extend it by 5 seconds
    python main.py extend --from last.json -p "Lightning strikes the tower" --duration 5
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate a video")
    gen_parser.add_argument("--prompt", "-p", required=True, help="What the video should show")
    gen_parser.add_argument(
        "--aspect-ratio",
        choices=[a.value for a in AspectRatio],
        default=AspectRatio.LANDSCAPE.value,
        help="Output aspect ratio",
    )
    gen_parser.add_argument(
        "--resolution",
        choices=[r.value for r in Resolution],
        default=Resolution.HD.value,
        help="Output resolution",
    )
    gen_parser.add_argument(
        "--model",
        "-m",
        choices=["fast", "quality"],
        help="Model variant (default from VEO_DEFAULT_MODEL)",
    )
    gen_parser.add_argument(
        "--effect",
        choices=[e.value for e in VideoEffect],
        default=VideoEffect.NONE.value,
        help="Style appended to the prompt",
    )
    gen_parser.add_argument("--save-operation", help="Write the finished operation to this JSON file")
    gen_parser.add_argument("--download", "-o", help="Download the video into this directory")

    # Extend command
    ext_parser = subparsers.add_parser("extend", help="Extend a previously generated video")
    ext_parser.add_argument("--from", dest="source", required=True, help="Saved operation JSON file")
    ext_parser.add_argument("--prompt", "-p", required=True, help="What happens next")
    ext_parser.add_argument("--duration", "-d", type=int, default=7, help="Seconds to add (1-10)")
    ext_parser.add_argument(
        "--save-operation",
        help="Write the extended operation here (default: overwrite --from)",
    )
    ext_parser.add_argument("--download", "-o", help="Download the video into this directory")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        if args.command == "generate":
            sys.exit(asyncio.run(generate_video(args)))
        elif args.command == "extend":
            sys.exit(asyncio.run(extend_video(args)))
    except ValidationError as e:
        for err in e.errors():
            field_name = ".".join(str(part) for part in err["loc"])
            logger.error(f"Invalid {field_name}: {err['msg']}")
        sys.exit(EXIT_FAILED)


if __name__ == "__main__":
    main()
