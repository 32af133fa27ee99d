"""AI-backed generation of programs, nutrition plans and exercise swaps."""

from dataclasses import replace
from pathlib import Path

from loguru import logger

from ..agents.orchestrator import GenerationOrchestrator
from ..agents.prompts import build_nutrition_prompt, build_program_prompt, build_swap_prompt
from ..agents.provider import AnthropicProvider, GenerationProvider
from ..config import Settings, get_settings
from ..db.engine import get_db_path
from ..db.repositories import ClientRepository, NutritionPlanRepository, ProgramRepository
from ..errors import ClientNotFoundError, PersistenceFailure, StaleArtifactError
from ..models.client import Client
from ..models.exercises import ExerciseAlternative, parse_alternatives
from ..models.nutrition import NutritionData, NutritionPlan
from ..models.program import Program, ProgramData
from ..models.requests import NutritionRequest, ProgramRequest, SwapRequest

PROGRAM = "program"
NUTRITION_PLAN = "nutrition_plan"
EXERCISE_SWAP = "exercise_swap"


class GenerationService:
    """Generates artifacts for a trainer's clients and stores them.

    Example:
        service = GenerationService(orchestrator, clients, programs, plans)
        program = await service.generate_program("trainer-1", client_id, ProgramRequest())
    """

    def __init__(
        self,
        orchestrator: GenerationOrchestrator,
        clients: ClientRepository,
        programs: ProgramRepository,
        nutrition_plans: NutritionPlanRepository,
    ):
        self.orchestrator = orchestrator
        self.clients = clients
        self.programs = programs
        self.nutrition_plans = nutrition_plans

    async def _require_client(self, trainer_id: str, client_id: str) -> Client:
        client = await self.clients.get(trainer_id, client_id)
        if client is None:
            logger.warning("Client not found", trainer_id=trainer_id, client_id=client_id)
            raise ClientNotFoundError(client_id)
        return client

    async def generate_program(
        self, trainer_id: str, client_id: str, request: ProgramRequest
    ) -> Program:
        """Generate a workout program and store it.

        Raises:
            ClientNotFoundError: unknown client or owned by another trainer
            GenerationFailed: every provider attempt failed
            PersistenceFailure: the program was generated but not saved
        """
        client = await self._require_client(trainer_id, client_id)

        def parse(document: dict) -> Program:
            return Program(
                client_id=client_id,
                trainer_id=trainer_id,
                data=ProgramData.from_dict(document),
            )

        return await self.orchestrator.generate_and_persist(
            PROGRAM,
            client_id,
            build_program_prompt(client, request),
            parse,
            self.programs.create,
        )

    async def generate_nutrition_plan(
        self, trainer_id: str, client_id: str, request: NutritionRequest
    ) -> NutritionPlan:
        """Generate a nutrition plan, replacing the client's current one.

        The previous plan is only removed once the new one has been
        generated, in the same transaction that stores it.
        """
        await self._require_client(trainer_id, client_id)
        previous = await self.nutrition_plans.get_for_client(trainer_id, client_id)

        def parse(document: dict) -> NutritionPlan:
            return NutritionPlan(
                client_id=client_id,
                trainer_id=trainer_id,
                data=NutritionData.from_dict(document),
            )

        try:
            return await self.orchestrator.generate_and_persist(
                NUTRITION_PLAN,
                client_id,
                build_nutrition_prompt(request),
                parse,
                self.nutrition_plans.replace_for_client,
            )
        except PersistenceFailure as e:
            e.replaces_id = previous.id if previous else None
            raise

    async def suggest_alternatives(
        self, trainer_id: str, request: SwapRequest
    ) -> list[ExerciseAlternative]:
        """Suggest substitutes for an exercise. Nothing is stored."""
        client = await self._require_client(trainer_id, request.client_id)
        if request.injuries is None and client.injuries:
            request = replace(request, injuries=client.injuries)

        return await self.orchestrator.generate(
            EXERCISE_SWAP,
            request.client_id,
            build_swap_prompt(request),
            parse_alternatives,
        )

    async def retry_save(self, failure: PersistenceFailure) -> Program | NutritionPlan:
        """Store an artifact whose first save failed, without regenerating it.

        A nutrition plan is only stored while the plan it was generated to
        replace is still current.

        Raises:
            PersistenceFailure: the save failed again
            StaleArtifactError: a newer nutrition plan was saved meanwhile
        """
        artifact = failure.artifact
        if failure.kind == PROGRAM:
            save = self.programs.create
        elif failure.kind == NUTRITION_PLAN:
            async def save(plan: NutritionPlan) -> NutritionPlan | None:
                return await self.nutrition_plans.replace_if_current(plan, failure.replaces_id)
        else:
            raise ValueError(f"Cannot save artifact of kind {failure.kind}")

        try:
            saved = await save(artifact)
        except Exception as e:
            logger.error(
                "Retrying save failed",
                kind=failure.kind,
                subject_id=artifact.client_id,
                outcome="persistence_failure",
                error=str(e),
            )
            raise PersistenceFailure(failure.kind, artifact, e, failure.replaces_id) from e

        if saved is None:
            logger.warning(
                "Pending save superseded by a newer plan",
                kind=failure.kind,
                subject_id=artifact.client_id,
                outcome="stale",
            )
            raise StaleArtifactError(failure.kind, artifact.client_id)

        logger.info(
            "Generated artifact persisted on retry",
            kind=failure.kind,
            subject_id=artifact.client_id,
            outcome="persisted",
        )
        return saved


def create_generation_service(
    settings: Settings | None = None,
    provider: GenerationProvider | None = None,
    db_path: Path | None = None,
) -> GenerationService:
    """Wire a GenerationService from settings.

    Args:
        settings: Application settings (defaults to the cached ones)
        provider: Generation provider; an AnthropicProvider when omitted
        db_path: Database file (defaults to the configured data dir)
    """
    settings = settings or get_settings()
    db_path = db_path or get_db_path(settings.data_dir)
    if provider is None:
        provider = AnthropicProvider(
            api_key=settings.anthropic_api_key,
            model=settings.model,
            max_tokens=settings.max_tokens,
        )
    orchestrator = GenerationOrchestrator(provider, settings.generation_policy())
    return GenerationService(
        orchestrator,
        ClientRepository(db_path),
        ProgramRepository(db_path),
        NutritionPlanRepository(db_path),
    )
