import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Generic, List, Optional, Type, TypeVar, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import NotFoundError, SupersetProviderError
from ..schema import Schema

if TYPE_CHECKING:
    from ..clients.http import SupersetClient

logger = logging.getLogger(__name__)

StateT = TypeVar("StateT", bound=BaseModel)


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Diagnostic(BaseModel):
    severity: Severity = Severity.ERROR
    summary: str
    detail: str = ""
    attribute: Optional[str] = None


class ResourceResponse(BaseModel):
    """Outcome of one CRUD callback: the new state plus diagnostics.

    `removed` tells the engine to drop the resource from its state.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    state: Optional[Any] = None
    diagnostics: List[Diagnostic] = Field(default_factory=list)
    removed: bool = False

    @property
    def has_error(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self.diagnostics)


def timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def prefer(observed: Any, prior: Any) -> Any:
    """Take the observed value unless the API returned nothing for it."""
    if observed is None or observed == "" or observed == []:
        return prior
    return observed


class BaseResource(Generic[StateT]):
    """CRUD lifecycle shared by every managed resource.

    Subclasses implement `_create`, `_read`, `_update` and `_delete`; the
    public callbacks validate the plan and turn provider errors into
    diagnostics. Nothing is retried.
    """

    type_name: str
    display_name: str
    schema: Schema
    state_model: Type[StateT]

    def __init__(self, client: "SupersetClient"):
        self.client = client

    # ------------------------------------------------------------------
    # Engine-facing callbacks
    # ------------------------------------------------------------------
    async def create(self, plan: StateT) -> ResourceResponse:
        diagnostics = self.validate(plan)
        if diagnostics:
            return ResourceResponse(diagnostics=diagnostics)
        try:
            state = await self._create(plan)
        except SupersetProviderError as e:
            return self._failed("Create", e)
        logger.info(f"Created {self.type_name} {self._describe(state)}")
        return ResourceResponse(state=state)

    async def read(self, state: StateT) -> ResourceResponse:
        try:
            observed = await self._read(state)
        except SupersetProviderError as e:
            return self._failed("Read", e)
        if observed is None:
            logger.warning(f"{self.type_name} {self._describe(state)} not found in Superset, removing from state")
            return ResourceResponse(removed=True)
        return ResourceResponse(state=observed)

    async def update(self, plan: StateT, state: StateT) -> ResourceResponse:
        diagnostics = self.validate(plan)
        if diagnostics:
            return ResourceResponse(state=state, diagnostics=diagnostics)
        try:
            new_state = await self._update(plan, state)
        except SupersetProviderError as e:
            return self._failed("Update", e, state=state)
        logger.info(f"Updated {self.type_name} {self._describe(new_state)}")
        return ResourceResponse(state=new_state)

    async def delete(self, state: StateT) -> ResourceResponse:
        try:
            await self._delete(state)
        except NotFoundError:
            logger.info(f"{self.type_name} {self._describe(state)} already absent")
        except SupersetProviderError as e:
            return self._failed("Delete", e, state=state)
        else:
            logger.info(f"Deleted {self.type_name} {self._describe(state)}")
        return ResourceResponse(removed=True)

    async def import_state(self, import_id: str) -> ResourceResponse:
        try:
            resource_id = int(import_id)
        except (TypeError, ValueError):
            return ResourceResponse(diagnostics=[Diagnostic(
                summary="Invalid Import ID",
                detail=f"The provided import ID '{import_id}' is not a valid integer",
                attribute="id",
            )])
        try:
            state = await self._import(resource_id)
        except SupersetProviderError as e:
            return self._failed("Import", e)
        if state is None:
            return ResourceResponse(diagnostics=[Diagnostic(
                summary=f"{self.display_name} Not Found During Import",
                detail=f"{self.display_name} with ID {resource_id} not found",
            )])
        return ResourceResponse(state=state)

    @classmethod
    def validate(cls, plan: StateT) -> List[Diagnostic]:
        """Report required attributes the plan leaves empty."""
        values = plan.model_dump(by_alias=True)
        diagnostics = []
        for name in cls.schema.required_attributes():
            value = values.get(name)
            if value is None or value == "":
                diagnostics.append(Diagnostic(
                    summary=f"Missing {name}",
                    detail=f"The attribute '{name}' is required for {cls.type_name}",
                    attribute=name,
                ))
        return diagnostics

    # ------------------------------------------------------------------
    # Subclass hooks
    # ------------------------------------------------------------------
    async def _create(self, plan: StateT) -> StateT:
        raise NotImplementedError

    async def _read(self, state: StateT) -> Optional[StateT]:
        raise NotImplementedError

    async def _update(self, plan: StateT, state: StateT) -> StateT:
        raise NotImplementedError

    async def _delete(self, state: StateT) -> None:
        raise NotImplementedError

    async def _import(self, resource_id: int) -> Optional[StateT]:
        return await self._read(self.state_model(id=resource_id))

    def _failed(self, action: str, error: Exception, state: Optional[StateT] = None) -> ResourceResponse:
        summary = f"Unable to {action} {self.display_name}"
        logger.error(f"{summary}: {error}")
        return ResourceResponse(state=state, diagnostics=[Diagnostic(summary=summary, detail=str(error))])

    @staticmethod
    def _describe(state: Optional[BaseModel]) -> str:
        return f"ID={getattr(state, 'id', None)}"
