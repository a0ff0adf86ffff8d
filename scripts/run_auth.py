#!/usr/bin/env python3
"""Authenticate a probe image against a directory of enrolled faces.

Every image in the enrollment directory is enrolled under its file stem
(``alice.jpg`` → ``alice``). Selected users can be deactivated before the
probe is compared. The decision is printed as JSON.

Usage:
    python scripts/run_auth.py --probe probe.jpg --enroll-dir data/users
    python scripts/run_auth.py --probe probe.jpg --enroll-dir data/users --inactive bob carol
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from faceauth.backends import create_services
from faceauth.config import Config
from faceauth.errors import FaceAuthError
from faceauth.logging_config import setup_logging

logger = setup_logging("faceauth.scripts.run_auth")

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".bmp"}


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Authenticate a probe face against enrolled users (dlib backend)",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--probe",
        type=str,
        required=True,
        help="Path to the probe image",
    )

    parser.add_argument(
        "--enroll-dir",
        type=str,
        required=True,
        help="Directory of reference images, one per user (file stem = username)",
    )

    parser.add_argument(
        "--inactive",
        type=str,
        nargs="*",
        default=[],
        help="Usernames to deactivate before comparing",
    )

    return parser.parse_args()


def main() -> int:
    """Main function."""
    args = parse_args()

    probe_path = Path(args.probe)
    if not probe_path.is_file():
        logger.error(f"Probe image not found: {probe_path}")
        return 1

    enroll_dir = Path(args.enroll_dir)
    if not enroll_dir.is_dir():
        logger.error(f"Enrollment directory not found: {enroll_dir}")
        return 1

    config = Config.from_env()
    logger.info(f"Loaded configuration:\n{config}")

    services = create_services(config)

    image_paths = sorted(
        p for p in enroll_dir.iterdir() if p.suffix.lower() in IMAGE_EXTENSIONS
    )
    if not image_paths:
        logger.warning(f"No images found in {enroll_dir}")

    for image_path in image_paths:
        services.enrollment.enroll(image_path.stem, image_path.name, image_path.read_bytes())

    try:
        for username in args.inactive:
            services.enrollment.set_active(username, False)

        decision = services.authentication.authenticate(
            probe_path.read_bytes(), filename=probe_path.name
        )
    except FaceAuthError as e:
        logger.error(f"Could not process probe image: {e}")
        return 1

    print(json.dumps(decision.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
