"""Dependency injection container.

設定・永続化・外部サービス・ユースケースの依存関係を組み立てる。
CLIからは ``get_container()`` / ``init_container()`` で取得する。
"""

from dependency_injector import containers, providers

from src.application.services.quiz_expiry_sweeper import QuizExpirySweeper
from src.application.usecases.analyze_financial_health_usecase import (
    AnalyzeFinancialHealthUseCase,
)
from src.application.usecases.cast_ballot_usecase import CastBallotUseCase
from src.application.usecases.generate_quiz_questions_usecase import (
    GenerateQuizQuestionsUseCase,
)
from src.application.usecases.get_election_results_usecase import (
    GetElectionResultsUseCase,
)
from src.application.usecases.manage_election_candidates_usecase import (
    ManageElectionCandidatesUseCase,
)
from src.application.usecases.manage_election_phase_usecase import (
    ManageElectionPhaseUseCase,
)
from src.application.usecases.manage_quiz_lifecycle_usecase import (
    ManageQuizLifecycleUseCase,
)
from src.common.logging import get_logger
from src.domain.repositories.state_store import IStateStore
from src.domain.services.ballot_tabulation_service import BallotTabulationService
from src.domain.services.election_phase_policy import ElectionPhasePolicy
from src.domain.services.financial_summary_service import FinancialSummaryService
from src.domain.services.quiz_scoring_service import QuizScoringService
from src.infrastructure.config.async_database import AsyncDatabase
from src.infrastructure.config.settings import Settings, get_settings
from src.infrastructure.external.llm_service_factory import LLMServiceFactory
from src.infrastructure.persistence.election_state_repository_impl import (
    ElectionStateRepositoryImpl,
)
from src.infrastructure.persistence.quiz_repository_impl import QuizRepositoryImpl
from src.infrastructure.persistence.sqlalchemy_state_store import (
    SqlAlchemyStateStore,
)


logger = get_logger(__name__)


class DatabaseContainer(containers.DeclarativeContainer):
    """データベース関連のプロバイダ."""

    config = providers.Configuration()

    async_database = providers.Singleton(
        AsyncDatabase, database_url=config.database_url
    )

    state_store = providers.Singleton(SqlAlchemyStateStore, database=async_database)


class RepositoryContainer(containers.DeclarativeContainer):
    """リポジトリのプロバイダ."""

    config = providers.Configuration()
    database = providers.DependenciesContainer()

    election_state_repository = providers.Factory(
        ElectionStateRepositoryImpl,
        store=database.state_store,
        key_prefix=config.state_key_prefix,
    )

    quiz_repository = providers.Factory(
        QuizRepositoryImpl,
        store=database.state_store,
        key_prefix=config.state_key_prefix,
    )


class ServiceContainer(containers.DeclarativeContainer):
    """ドメインサービスと外部サービスのプロバイダ."""

    config = providers.Configuration()

    phase_policy = providers.Singleton(ElectionPhasePolicy)
    tabulation_service = providers.Singleton(BallotTabulationService)
    scoring_service = providers.Singleton(QuizScoringService)
    financial_summary_service = providers.Singleton(FinancialSummaryService)

    llm_service = providers.Singleton(
        LLMServiceFactory.create,
        api_key=config.google_api_key,
        model_name=config.llm_model_name,
    )


class UseCaseContainer(containers.DeclarativeContainer):
    """ユースケースのプロバイダ."""

    config = providers.Configuration()
    repositories = providers.DependenciesContainer()
    services = providers.DependenciesContainer()

    manage_election_phase_usecase = providers.Factory(
        ManageElectionPhaseUseCase,
        election_state_repository=repositories.election_state_repository,
        phase_policy=services.phase_policy,
        tabulation_service=services.tabulation_service,
    )

    manage_election_candidates_usecase = providers.Factory(
        ManageElectionCandidatesUseCase,
        election_state_repository=repositories.election_state_repository,
        phase_policy=services.phase_policy,
    )

    cast_ballot_usecase = providers.Factory(
        CastBallotUseCase,
        election_state_repository=repositories.election_state_repository,
        phase_policy=services.phase_policy,
        tabulation_service=services.tabulation_service,
    )

    get_election_results_usecase = providers.Factory(
        GetElectionResultsUseCase,
        election_state_repository=repositories.election_state_repository,
        phase_policy=services.phase_policy,
        tabulation_service=services.tabulation_service,
    )

    manage_quiz_lifecycle_usecase = providers.Factory(
        ManageQuizLifecycleUseCase,
        quiz_repository=repositories.quiz_repository,
        scoring_service=services.scoring_service,
        grace_period_minutes=config.quiz_grace_period_minutes,
    )

    generate_quiz_questions_usecase = providers.Factory(
        GenerateQuizQuestionsUseCase,
        quiz_repository=repositories.quiz_repository,
        llm_service=services.llm_service,
    )

    analyze_financial_health_usecase = providers.Factory(
        AnalyzeFinancialHealthUseCase,
        llm_service=services.llm_service,
        summary_service=services.financial_summary_service,
    )

    quiz_expiry_sweeper = providers.Factory(
        QuizExpirySweeper,
        quiz_lifecycle_usecase=manage_quiz_lifecycle_usecase,
        interval_seconds=config.quiz_sweep_interval_seconds,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """アプリケーション全体のコンテナ."""

    config = providers.Configuration()

    database = providers.Container(DatabaseContainer, config=config)

    repositories = providers.Container(
        RepositoryContainer, config=config, database=database
    )

    services = providers.Container(ServiceContainer, config=config)

    use_cases = providers.Container(
        UseCaseContainer,
        config=config,
        repositories=repositories,
        services=services,
    )


_container: ApplicationContainer | None = None


def init_container(
    settings: Settings | None = None,
    state_store: IStateStore | None = None,
) -> ApplicationContainer:
    """コンテナを初期化する.

    Args:
        settings: 設定（省略時は環境変数から読み込んだ設定）
        state_store: 状態ストアの差し替え（テストでインメモリ実装を使う場合など）

    Returns:
        初期化済みのコンテナ
    """
    global _container

    settings = settings or get_settings()
    container = ApplicationContainer()
    container.config.from_dict(settings.model_dump())
    if state_store is not None:
        container.database.state_store.override(providers.Object(state_store))

    _container = container
    logger.debug(
        "DI container initialized",
        llm_enabled=settings.has_llm_credentials(),
    )
    return container


def get_container() -> ApplicationContainer:
    """初期化済みのコンテナを取得する.

    Raises:
        RuntimeError: ``init_container()`` がまだ呼ばれていない場合
    """
    if _container is None:
        raise RuntimeError("Container not initialized. Call init_container() first.")
    return _container


def reset_container() -> None:
    """コンテナを破棄する（テスト用）."""
    global _container
    _container = None
