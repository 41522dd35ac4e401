import pytest

from readiness_gate.domain.feasibility.services.line_completeness_service import (
    LineCompletenessService,
)
from readiness_gate.infrastructure.loaders.in_memory_loader import (
    InMemoryFeasibilityLoader,
)
from readiness_gate.tests.factories import CameraFactory, LineFactory, ProjectFactory


@pytest.fixture
def loader() -> InMemoryFeasibilityLoader:
    return InMemoryFeasibilityLoader()


@pytest.fixture
def line_service(loader: InMemoryFeasibilityLoader) -> LineCompletenessService:
    return LineCompletenessService(loader, max_concurrent_loads=4)


@pytest.fixture
def complete_camera():
    return CameraFactory.create()


@pytest.fixture
def complete_line():
    return LineFactory.create()


@pytest.fixture
def project():
    return ProjectFactory.create()
