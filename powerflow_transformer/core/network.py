"""
Network wrapper class for transformer matrix initialization.

This module provides a high-level Network class that holds the transformer
configurations and links of a feeder and initializes them with one
simulation-wide solver formulation.
"""

import logging
from enum import Enum

from ..matrices.diagnostics import diagnose_transformer, print_diagnostics
from .elements import SolverMethod, TransformerConfiguration
from .exceptions import TransformerModelError
from .transformer import Transformer

logger = logging.getLogger(__name__)


class ErrorPolicy(Enum):
    """What Network.initialize() does when a transformer fails."""
    ABORT = "abort"  # Re-raise the first error
    SKIP = "skip"    # Log, leave the transformer uninitialized, continue


class Network:
    """
    High-level container for transformer links.

    This class provides a convenient interface for:
    - Registering shared transformer configurations
    - Adding transformer links
    - Initializing every transformer with the simulation's solver method
    - Running matrix diagnostics
    """

    def __init__(self, solver_method: SolverMethod = SolverMethod.FORWARD_BACKWARD_SWEEP):
        """
        Initialize an empty Network.

        Args:
            solver_method: Simulation-wide solver formulation (default FBS)
        """
        self.solver_method = solver_method

        self.configurations: dict[str, TransformerConfiguration] = {}
        self.transformers: list[Transformer] = []

        # Results of the last initialize() call
        self.errors: dict[str, TransformerModelError] = {}

    def add_configuration(self, configuration: TransformerConfiguration) -> None:
        """Register a named configuration so transformers can refer to it by name."""
        if not configuration.name:
            raise ValueError("Configuration must have a name to be registered")
        self.configurations[configuration.name] = configuration

    def add_transformer(
        self,
        transformer: Transformer,
        configuration: TransformerConfiguration | str | None = None,
    ) -> Transformer:
        """
        Add a transformer link.

        Args:
            transformer: Transformer to add
            configuration: Configuration object, or name of a registered one (optional)

        Returns:
            The added transformer
        """
        if any(t.name == transformer.name for t in self.transformers):
            raise ValueError(f"Transformer '{transformer.name}' already exists")

        if isinstance(configuration, str):
            if configuration not in self.configurations:
                raise KeyError(f"Configuration '{configuration}' not found")
            configuration = self.configurations[configuration]
        if configuration is not None:
            transformer.attach_configuration(configuration)

        self.transformers.append(transformer)
        return transformer

    def get_transformer(self, name: str) -> Transformer:
        """
        Get a transformer by name.

        Raises:
            KeyError: If no transformer has this name
        """
        for t in self.transformers:
            if t.name == name:
                return t
        raise KeyError(f"Transformer '{name}' not found")

    def initialize(self, error_policy: ErrorPolicy = ErrorPolicy.ABORT) -> dict[str, TransformerModelError]:
        """
        Initialize every transformer that is not initialized yet.

        Args:
            error_policy: ABORT re-raises the first error, SKIP logs it and continues

        Returns:
            Dictionary of transformer name to error for the transformers that failed
        """
        self.errors = {}

        for transformer in self.transformers:
            if transformer.is_initialized:
                continue
            try:
                transformer.initialize(self.solver_method)
            except TransformerModelError as e:
                if error_policy == ErrorPolicy.ABORT:
                    raise
                logger.warning(f" Transformer '{transformer.name}': {e.message}, skipping")
                self.errors[transformer.name] = e

        return self.errors

    @property
    def n_transformers(self) -> int:
        """Number of transformers in the network."""
        return len(self.transformers)

    @property
    def initialized_transformers(self) -> list[Transformer]:
        """Transformers whose matrices are available."""
        return [t for t in self.transformers if t.is_initialized]

    @property
    def n_initialized(self) -> int:
        """Number of initialized transformers."""
        return len(self.initialized_transformers)

    @property
    def failed_transformers(self) -> list[str]:
        """Names of transformers that failed in the last initialize() call."""
        return list(self.errors)

    def diagnose(self, print_results: bool = True) -> dict[str, dict]:
        """
        Run matrix diagnostics on every initialized transformer.

        Args:
            print_results: If True, print a formatted report per transformer

        Returns:
            Dictionary of transformer name to diagnostic results
        """
        results = {}
        for transformer in self.initialized_transformers:
            diag = diagnose_transformer(transformer)
            if print_results:
                print_diagnostics(diag)
            results[transformer.name] = diag
        return results
