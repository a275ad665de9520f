"""CP-SAT nonogram backend using OR-Tools.

Every line becomes an automaton constraint over its cell variables: the
automaton reads ``0`` for an empty cell and ``1`` for a filled one and only
accepts words matching the line's block spec.
"""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from ortools.sat.python import cp_model

from ..core.constants import Cell, LineKind
from ..core.exceptions import SolverBackendError
from ..utils.logger import get_logger
from .grid import NonogramGrid


LOGGER = get_logger(__name__)

Transition = Tuple[int, int, int]


def spec_automaton(spec: Sequence[int]) -> Tuple[List[Transition], int]:
    """Build ``(transitions, final_state)`` for the automaton accepting ``spec``.

    States are numbered from 1. State ``s`` means "the first ``s - 1`` symbols
    of the pattern ``0 1^b0 0 1^b1 0 ...`` have been matched", where every
    ``0`` in the pattern may repeat.
    """

    if not spec:
        return [(1, 0, 1)], 1

    pattern = [0]
    for block in spec:
        pattern.extend([1] * block)
        pattern.append(0)

    final_state = len(spec) + sum(spec)
    transitions: List[Transition] = []
    for index in range(final_state):
        state = index + 1
        if pattern[index] == 0:
            transitions.append((state, 0, state))
            transitions.append((state, 1, state + 1))
        elif index < final_state - 1:
            transitions.append((state, pattern[index + 1], state + 1))
    transitions.append((final_state, 0, final_state))
    return transitions, final_state


def solve_with_cpsat(grid: NonogramGrid, timeout: float = 30.0, workers: int = 4) -> bool:
    """Solve ``grid`` with CP-SAT, writing the colouring back on success.

    Cells already resolved in ``grid`` are fixed in the model. Returns
    ``False`` when the model is proven infeasible and raises
    :class:`SolverBackendError` when CP-SAT stops without an answer.
    """

    model = cp_model.CpModel()
    cell_vars: Dict[Tuple[int, int], cp_model.IntVar] = {}
    for r in range(grid.height):
        for c in range(grid.length):
            var = model.new_bool_var(f"x_{r}_{c}")
            known = grid.cell(r, c)
            if known is Cell.FILLED:
                model.add(var == 1)
            elif known is Cell.EMPTY:
                model.add(var == 0)
            cell_vars[(r, c)] = var

    for kind in (LineKind.ROW, LineKind.COLUMN):
        for ref in grid.line_refs(kind):
            if kind == LineKind.ROW:
                line_vars = [cell_vars[(ref.index, c)] for c in range(grid.length)]
            else:
                line_vars = [cell_vars[(r, ref.index)] for r in range(grid.height)]
            transitions, final_state = spec_automaton(grid.spec(ref))
            model.add_automaton(line_vars, 1, [final_state], transitions)

    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.num_workers = workers

    LOGGER.info(
        "CP-SAT: %dx%d grid, %d cell vars, solving (timeout=%0.1fs)...",
        grid.height,
        grid.length,
        len(cell_vars),
        timeout,
    )
    status = solver.solve(model)

    if status == cp_model.INFEASIBLE:
        LOGGER.warning("CP-SAT: puzzle is infeasible")
        return False
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        raise SolverBackendError(f"CP-SAT stopped without a solution (status={solver.status_name(status)})")

    LOGGER.info("CP-SAT: solution found in %.2fs", solver.wall_time)
    for (r, c), var in cell_vars.items():
        grid.set_cell(r, c, Cell.FILLED if solver.value(var) else Cell.EMPTY)
    return True
