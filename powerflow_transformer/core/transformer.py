"""
Transformer link element.

A Transformer owns the two-port matrices computed from its configuration.
The matrices are computed once by initialize() and are read-only afterwards;
the external solver reads them on every pass.
"""

import logging
from dataclasses import dataclass, field

from ..matrices.builder import build_transformer_matrices
from ..matrices.twoport import PerUnitParameters, TwoPortMatrices
from .elements import (
    ConnectionType,
    Phase,
    SolverMethod,
    SpecialLink,
    TransformerConfiguration,
    parse_phases,
    special_link_for,
)
from .exceptions import (
    ConfigurationInvalidType,
    ConfigurationMissing,
    TransformerModelError,
)

logger = logging.getLogger(__name__)


@dataclass
class Transformer:
    """
    Two-terminal transformer link.

    Lifecycle:
        1. construct (configuration optional)
        2. attach_configuration() (or pass ``configuration=`` at construction)
        3. initialize(solver_method) computes the six matrices
        4. matrices are read-only inputs to the external solver

    Attributes:
        name: Object name, used as error context
        from_node: Primary side node name
        to_node: Secondary side node name
        phases: Active primary phases (Phase flag, or a string such as "ABC")
        configuration: Attached TransformerConfiguration
    """
    name: str
    from_node: str = ""
    to_node: str = ""
    phases: Phase | str = Phase.ABC
    configuration: TransformerConfiguration | None = None
    _params: PerUnitParameters | None = field(default=None, init=False, repr=False)
    _matrices: TwoPortMatrices | None = field(default=None, init=False, repr=False)
    _solver_method: SolverMethod | None = field(default=None, init=False, repr=False)
    _built_phases: Phase | None = field(default=None, init=False, repr=False)

    def __post_init__(self):
        self.phases = parse_phases(self.phases)

    def attach_configuration(self, configuration: TransformerConfiguration) -> None:
        """Attach a configuration. Not allowed once the matrices exist."""
        if self.is_initialized:
            raise RuntimeError(f"Transformer '{self.name}' is already initialized")
        self.configuration = configuration

    def _validated_configuration(self) -> TransformerConfiguration:
        if self.configuration is None:
            raise ConfigurationMissing(
                "no transformer configuration specified",
                field="configuration", object_id=self.name,
            )
        if not isinstance(self.configuration, TransformerConfiguration):
            raise ConfigurationInvalidType(
                f"invalid transformer configuration "
                f"(got {type(self.configuration).__name__})",
                field="configuration", object_id=self.name,
            )
        return self.configuration

    def initialize(
        self,
        solver_method: SolverMethod = SolverMethod.FORWARD_BACKWARD_SWEEP,
    ) -> TwoPortMatrices:
        """
        Compute the two-port matrices.

        Args:
            solver_method: Simulation-wide solver formulation

        Returns:
            The frozen matrix bundle

        Raises:
            TransformerModelError: Any configuration/solver/topology error, with
                object_id set to this transformer's name. No matrices are stored.
            RuntimeError: If the transformer is already initialized
        """
        if self.is_initialized:
            raise RuntimeError(f"Transformer '{self.name}' is already initialized")

        try:
            config = self._validated_configuration()
            phases = parse_phases(self.phases)
            params, matrices = build_transformer_matrices(config, phases, solver_method)
        except TransformerModelError as e:
            e.object_id = self.name
            raise

        self._params = params
        self._matrices = matrices
        self._solver_method = solver_method
        self._built_phases = phases
        logger.info(
            f" Transformer '{self.name}': {self.connection_type.name} initialized "
            f"({solver_method.value}, nt={params.turns_ratio:.6g})"
        )
        return matrices

    @property
    def is_initialized(self) -> bool:
        """True once initialize() succeeded."""
        return self._matrices is not None

    @property
    def matrices(self) -> TwoPortMatrices:
        """The six two-port matrices."""
        if self._matrices is None:
            raise RuntimeError("Must call initialize() first")
        return self._matrices

    @property
    def per_unit(self) -> PerUnitParameters:
        """Turns ratio and base impedance used to build the matrices."""
        if self._params is None:
            raise RuntimeError("Must call initialize() first")
        return self._params

    @property
    def turns_ratio(self) -> float:
        return self.per_unit.turns_ratio

    @property
    def voltage_ratio(self) -> float:
        """Unscaled V_primary / V_secondary (equal to turns_ratio)."""
        return self.per_unit.turns_ratio

    @property
    def base_impedance(self) -> complex:
        return self.per_unit.base_impedance

    @property
    def solver_method(self) -> SolverMethod:
        if self._solver_method is None:
            raise RuntimeError("Must call initialize() first")
        return self._solver_method

    @property
    def built_phases(self) -> Phase:
        """Phases the stored matrices were computed for."""
        if self._built_phases is None:
            raise RuntimeError("Must call initialize() first")
        return self._built_phases

    @property
    def connection_type(self) -> ConnectionType | int:
        """Connection type of the attached configuration."""
        return self._validated_configuration().connection_type

    @property
    def special_link(self) -> SpecialLink:
        """Link classification for the solver's phase checks."""
        return special_link_for(self.connection_type)
