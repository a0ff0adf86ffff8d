"""Backend factory for the face authentication engine.

Builds the descriptor extractor for a configured backend and wires the
services around it. Backend modules are imported lazily so the engine can
be used with other detector/embedder implementations without loading dlib.

Usage:
    config = get_config()
    services = create_services(config)
    decision = services.authentication.authenticate(probe_bytes)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from faceauth.config import Config, get_config
from faceauth.extractor import DescriptorExtractor
from faceauth.image_store import DirectoryImageStore
from faceauth.logging_config import get_logger
from faceauth.ranking import MatchRanker
from faceauth.roster import InMemoryRosterStore
from faceauth.services.authentication import AuthenticationService
from faceauth.services.enrollment import EnrollmentService

logger = get_logger(__name__)

# Backend type alias
BackendType = Literal["dlib"]


@dataclass
class ServiceComponents:
    """Container for wired services.

    Attributes:
        roster_store: Shared in-memory roster
        image_store: Directory store for enrolled images
        authentication: Authentication service
        enrollment: Enrollment service
    """

    roster_store: InMemoryRosterStore
    image_store: DirectoryImageStore
    authentication: AuthenticationService
    enrollment: EnrollmentService


def create_extractor(
    config: Config | None = None,
    backend_type: BackendType = "dlib",
) -> DescriptorExtractor:
    """Create a descriptor extractor for the specified backend.

    Args:
        config: Configuration object. If None, loads from .env
        backend_type: Backend to use (only "dlib" is available)

    Returns:
        DescriptorExtractor wrapping the backend's detector and embedder.

    Raises:
        ValueError: If the backend is unknown.
    """
    if config is None:
        config = get_config()

    if backend_type != "dlib":
        raise ValueError(f"Unknown backend type: {backend_type}")

    from faceauth.backends.dlib import DlibDetector, DlibEmbedder

    logger.info(f"Creating {backend_type} extractor")

    detector = DlibDetector(model=config.detector_model, upsample=config.upsample)
    embedder = DlibEmbedder(model=config.embedder_model, num_jitters=config.num_jitters)

    return DescriptorExtractor(detector=detector, embedder=embedder)


def create_services(
    config: Config | None = None,
    extractor: DescriptorExtractor | None = None,
) -> ServiceComponents:
    """Create the roster, image store and services sharing one configuration.

    Args:
        config: Configuration object. If None, loads from .env
        extractor: Extractor to use. If None, one is built with create_extractor()

    Returns:
        ServiceComponents with both services wired to the same roster.
    """
    if config is None:
        config = get_config()

    config.ensure_dirs()

    if extractor is None:
        extractor = create_extractor(config)

    roster_store = InMemoryRosterStore()
    image_store = DirectoryImageStore(config.uploads_dir)
    ranker = MatchRanker(extractor, image_store, max_workers=config.max_workers)

    authentication = AuthenticationService(
        roster_store=roster_store,
        extractor=extractor,
        ranker=ranker,
        temp_dir=config.temp_dir,
        grant_threshold=config.grant_threshold,
        report_threshold=config.report_threshold,
    )
    enrollment = EnrollmentService(roster_store, image_store)

    return ServiceComponents(
        roster_store=roster_store,
        image_store=image_store,
        authentication=authentication,
        enrollment=enrollment,
    )
