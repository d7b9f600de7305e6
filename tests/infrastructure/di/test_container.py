"""DIコンテナのテスト."""

import pytest

from src.application.usecases.manage_election_phase_usecase import (
    ManageElectionPhaseUseCase,
)
from src.application.usecases.manage_quiz_lifecycle_usecase import (
    ManageQuizLifecycleUseCase,
)
from src.infrastructure.config.settings import Settings
from src.infrastructure.di.container import (
    get_container,
    init_container,
    reset_container,
)
from src.infrastructure.external.null_llm_service import NullLLMService
from src.infrastructure.persistence.in_memory_state_store import InMemoryStateStore


@pytest.fixture(autouse=True)
def _reset():
    reset_container()
    yield
    reset_container()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        google_api_key=None,
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        quiz_grace_period_minutes=5,
        quiz_sweep_interval_seconds=30,
        state_key_prefix="test_",
    )


class TestContainer:
    def test_get_container_before_init(self):
        with pytest.raises(RuntimeError):
            get_container()

    def test_init_and_get(self, settings):
        container = init_container(settings)

        assert get_container() is container

    def test_wires_use_cases(self, settings):
        container = init_container(settings)

        phase_usecase = container.use_cases.manage_election_phase_usecase()
        quiz_usecase = container.use_cases.manage_quiz_lifecycle_usecase()

        assert isinstance(phase_usecase, ManageElectionPhaseUseCase)
        assert isinstance(quiz_usecase, ManageQuizLifecycleUseCase)
        assert quiz_usecase.lifecycle_service.grace_period.total_seconds() == 300

    def test_key_prefix_from_settings(self, settings):
        container = init_container(settings)

        repository = container.repositories.election_state_repository()

        assert repository.key("phase") == "test_election_phase"

    def test_null_llm_without_api_key(self, settings):
        container = init_container(settings)

        assert isinstance(container.services.llm_service(), NullLLMService)

    def test_sweeper_interval(self, settings):
        container = init_container(settings)

        assert container.use_cases.quiz_expiry_sweeper().interval_seconds == 30

    def test_state_store_override(self, settings):
        store = InMemoryStateStore()
        container = init_container(settings, state_store=store)

        repository = container.repositories.quiz_repository()

        assert repository.store is store
