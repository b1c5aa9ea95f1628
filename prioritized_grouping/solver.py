"""Solver adapter for the assignment program using ILP via PuLP/CBC."""

import logging

from pulp import PULP_CBC_CMD, LpMinimize, LpProblem, LpVariable, lpSum, value
from pulp.constants import (
    LpStatusInfeasible,
    LpStatusNotSolved,
    LpStatusOptimal,
    LpStatusUnbounded,
    LpSolutionIntegerFeasible,
)

from prioritized_grouping.errors import (
    ConfigurationError,
    InfeasibleAssignmentError,
    SolverTimeLimitError,
)
from prioritized_grouping.types import (
    DEFAULT_SEED,
    AssignmentProgram,
    SolverOutcome,
    SolverStatus,
)

logger = logging.getLogger(__name__)

STATUS_MAP = {
    LpStatusOptimal: SolverStatus.OPTIMAL,
    LpStatusInfeasible: SolverStatus.INFEASIBLE,
    LpStatusUnbounded: SolverStatus.UNBOUNDED,
    LpStatusNotSolved: SolverStatus.NOT_SOLVED,
}


class AssignmentSolver:
    """
    ILP-based solver for the capacity-constrained assignment program.

    Attributes:
        seed: Random seed handed to CBC (None leaves CBC's default)
        verbose: Show the solver log
        time_limit: Optional time limit in seconds
    """

    def __init__(
        self,
        seed: int | None = DEFAULT_SEED,
        verbose: bool = False,
        time_limit: float | None = None,
    ):
        if time_limit is not None and time_limit <= 0:
            raise ConfigurationError("time_limit must be positive")

        self.seed = seed
        self.verbose = verbose
        self.time_limit = time_limit

        # Model state (set during solve)
        self._model: LpProblem | None = None
        self._x: dict[tuple[int, int], LpVariable] = {}

    def _make_solver(self) -> PULP_CBC_CMD:
        options = [] if self.seed is None else [f"randomCbcSeed {self.seed}"]
        return PULP_CBC_CMD(
            msg=self.verbose, timeLimit=self.time_limit, options=options
        )

    def _build_model(self, program: AssignmentProgram) -> None:
        """Build the ILP model with decision variables and objective function."""
        self._model = LpProblem("Prioritized-Grouping", LpMinimize)

        self._x = {
            (g, s): LpVariable(f"x_{g}_{s}", cat="Binary")
            for g in range(program.num_groups)
            for s in range(program.num_subjects)
        }

        self._model += lpSum(
            program.costs[g][s] * var for (g, s), var in self._x.items()
        )

    def _add_constraints(self, program: AssignmentProgram) -> None:
        """Add capacity and uniqueness constraints to the model."""
        if self._model is None:
            raise RuntimeError("Model must be built before adding constraints")

        # Group size should not exceed capacity
        for g in range(program.num_groups):
            self._model += (
                lpSum(self._x[g, s] for s in range(program.num_subjects))
                <= program.capacities[g],
                f"capacity_{g}",
            )

        # Each subject is in exactly one group
        for s in range(program.num_subjects):
            self._model += (
                lpSum(self._x[g, s] for g in range(program.num_groups)) == 1,
                f"unique_{s}",
            )

    def _process_assignments(self) -> list[tuple[int, int]]:
        """Extract the (group, subject) pairs with x = 1."""
        pairs = []
        for (g, s), var in self._x.items():
            var_value = value(var)
            if var_value is not None and round(var_value) == 1:
                pairs.append((g, s))
        return pairs

    def solve(self, program: AssignmentProgram) -> SolverOutcome:
        """
        Solve the assignment program.

        Returns:
            SolverOutcome with the chosen (group, subject) index pairs

        Raises:
            SolverTimeLimitError: If the time limit ends the search before any
                assignment is found
            InfeasibleAssignmentError: If no assignment exists
        """
        if program.num_subjects == 0:
            logger.info("No subjects left to assign, skipping solver")
            return SolverOutcome(status=SolverStatus.OPTIMAL, pairs=[], objective_value=0.0)

        self._build_model(program)
        self._add_constraints(program)

        if self._model is None:
            raise RuntimeError("Model was not built")

        logger.info(
            "Solving assignment of %d subjects to %d groups",
            program.num_subjects,
            program.num_groups,
        )
        status_code = self._model.solve(self._make_solver())
        status = STATUS_MAP.get(status_code, SolverStatus.UNDEFINED)

        # CBC reports "Optimal" when stopped on time with an incumbent
        if (
            status == SolverStatus.OPTIMAL
            and self._model.sol_status == LpSolutionIntegerFeasible
        ):
            status = SolverStatus.FEASIBLE

        if status == SolverStatus.NOT_SOLVED and self.time_limit is not None:
            logger.warning("Solver stopped at the time limit without a solution")
            raise SolverTimeLimitError(self.time_limit)
        if status not in (SolverStatus.OPTIMAL, SolverStatus.FEASIBLE):
            logger.warning("Solver finished with status %s", status.value)
            raise InfeasibleAssignmentError(status.value)

        pairs = self._process_assignments()
        objective_value = program.total_cost(pairs)
        if status == SolverStatus.FEASIBLE:
            logger.warning(
                "Solver stopped at the time limit, assignment with cost %s "
                "may not be optimal",
                objective_value,
            )
        else:
            logger.info("Optimal assignment found, total cost %s", objective_value)

        return SolverOutcome(
            status=status, pairs=pairs, objective_value=objective_value
        )


def solve_program(
    program: AssignmentProgram,
    seed: int | None = DEFAULT_SEED,
    verbose: bool = False,
    time_limit: float | None = None,
) -> SolverOutcome:
    """
    Solve an assignment program with CBC.

    This is a convenience wrapper around AssignmentSolver.
    """
    solver = AssignmentSolver(seed=seed, verbose=verbose, time_limit=time_limit)
    return solver.solve(program)
