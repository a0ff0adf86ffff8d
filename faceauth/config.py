"""Configuration management for the face authentication engine.

This module loads configuration from environment variables (.env file) and
provides a centralized Config class for accessing application settings.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from faceauth.decision import GRANT_THRESHOLD, REPORT_THRESHOLD

# Load environment variables from .env file
load_dotenv()

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
VALID_DETECTOR_MODELS = ["hog", "cnn"]
VALID_EMBEDDER_MODELS = ["large", "small"]


@dataclass
class Config:
    """Application configuration loaded from environment variables.

    Attributes:
        grant_threshold: Similarity above which access is granted (exclusive, 0-100)
        report_threshold: Similarity from which the best identity is reported (inclusive, 0-100)
        detector_model: dlib detection model ("hog" or "cnn")
        upsample: Number of times the detector upsamples the image
        embedder_model: Landmark model used for encodings ("large" or "small")
        num_jitters: Number of re-samples per encoding
        max_workers: Thread pool size for per-identity comparisons (1 = sequential)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        uploads_dir: Directory holding enrolled images
        temp_dir: Directory for transient probe artifacts
    """

    grant_threshold: float
    report_threshold: float
    detector_model: str
    upsample: int
    embedder_model: str
    num_jitters: int
    max_workers: int
    log_level: str

    # Paths
    uploads_dir: Path
    temp_dir: Path

    @classmethod
    def from_env(cls) -> Config:
        """Load configuration from environment variables.

        Returns:
            Config instance with values from environment or defaults.

        Raises:
            ValueError: If environment variables are invalid.
        """
        # Get project root (parent of faceauth/)
        project_root = Path(__file__).parent.parent

        # Decision thresholds
        grant_threshold = float(os.getenv("GRANT_THRESHOLD", str(GRANT_THRESHOLD)))
        report_threshold = float(os.getenv("REPORT_THRESHOLD", str(REPORT_THRESHOLD)))
        if not 0.0 <= report_threshold <= grant_threshold <= 100.0:
            raise ValueError(
                "Thresholds must satisfy 0 <= REPORT_THRESHOLD <= GRANT_THRESHOLD <= 100, "
                f"got report={report_threshold}, grant={grant_threshold}"
            )

        # Detector configuration
        detector_model = os.getenv("DETECTOR_MODEL", "hog").lower()
        if detector_model not in VALID_DETECTOR_MODELS:
            raise ValueError(
                f"DETECTOR_MODEL must be one of {VALID_DETECTOR_MODELS}, got {detector_model}"
            )

        upsample = int(os.getenv("UPSAMPLE", "1"))
        if upsample < 0:
            raise ValueError(f"UPSAMPLE must be >= 0, got {upsample}")

        # Embedder configuration
        embedder_model = os.getenv("EMBEDDER_MODEL", "large").lower()
        if embedder_model not in VALID_EMBEDDER_MODELS:
            raise ValueError(
                f"EMBEDDER_MODEL must be one of {VALID_EMBEDDER_MODELS}, got {embedder_model}"
            )

        num_jitters = int(os.getenv("NUM_JITTERS", "1"))
        if num_jitters < 1:
            raise ValueError(f"NUM_JITTERS must be >= 1, got {num_jitters}")

        # Ranking
        max_workers = int(os.getenv("MAX_WORKERS", "4"))
        if max_workers < 1:
            raise ValueError(f"MAX_WORKERS must be >= 1, got {max_workers}")

        # Logging configuration
        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        if log_level not in VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {VALID_LOG_LEVELS}, got {log_level}")

        # Paths
        uploads_dir = Path(os.getenv("UPLOADS_DIR", str(project_root / "uploads")))
        temp_dir = Path(os.getenv("TEMP_DIR", str(uploads_dir / "temp")))

        return cls(
            grant_threshold=grant_threshold,
            report_threshold=report_threshold,
            detector_model=detector_model,
            upsample=upsample,
            embedder_model=embedder_model,
            num_jitters=num_jitters,
            max_workers=max_workers,
            log_level=log_level,
            uploads_dir=uploads_dir,
            temp_dir=temp_dir,
        )

    def ensure_dirs(self) -> None:
        """Create the uploads and temp directories if they don't exist."""
        self.uploads_dir.mkdir(parents=True, exist_ok=True)
        self.temp_dir.mkdir(parents=True, exist_ok=True)

    def __repr__(self) -> str:
        """Return string representation of config."""
        return (
            f"Config(\n"
            f"  Thresholds: grant>{self.grant_threshold}, report>={self.report_threshold},\n"
            f"  Detector: {self.detector_model} (upsample={self.upsample}),\n"
            f"  Embedder: {self.embedder_model} (jitters={self.num_jitters}),\n"
            f"  Workers: {self.max_workers},\n"
            f"  Log Level: {self.log_level},\n"
            f"  Uploads: {self.uploads_dir},\n"
            f"  Temp: {self.temp_dir}\n"
            f")"
        )


# Global config instance (lazy-loaded)
_config: Config | None = None


def get_config() -> Config:
    """Get global config instance (singleton pattern).

    Returns:
        Config instance loaded from environment.
    """
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config
