from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional

from minilisp import LispValue, SExpression
from minilisp.builtin.env_builtin import register
from minilisp.errors import MiniLispError
from minilisp.evaluation.evaluator import evaluate
from minilisp.reader.parser import read_all
from minilisp.types.atom import Nil
from minilisp.types.environment import Environment

logger = logging.getLogger(__name__)


@dataclass
class EvalOutcome:
    """Results of the forms that ran, and the error that stopped the run, if any."""

    results: list[LispValue] = field(default_factory=list)
    error: Optional[MiniLispError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Interpreter:
    """
    Reads and evaluates minilisp code.
    Keeps one Environment across calls, so definitions persist.
    """

    def __init__(self, prelude: str | None | Literal['auto'] = 'auto'):
        self.env: Environment = Environment()
        register(self.env)

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            # Lazy import to keep config out of the hot import path
            from minilisp.modules.prelude_loader import load_prelude
            load_prelude(self)
        elif prelude:
            self.eval_prelude(prelude)

    def eval_prelude(self, code: str) -> None:
        for expr in read_all(code):
            evaluate(expr, self.env)

    def eval_forms(self, forms: list[SExpression]) -> list[LispValue]:
        results: list[LispValue] = []
        for expr in forms:
            logger.debug("evaluating %s", expr)
            results.append(evaluate(expr, self.env))
        return results

    def eval(self, code: str) -> LispValue:
        """Evaluate every form in `code`.

        Returns nil for no forms, the value for one form, else the list of values.
        """
        results = self.eval_forms(read_all(code))
        if not results:
            return Nil
        if len(results) == 1:
            return results[0]
        return results

    def eval_file(self, path: Path | str) -> LispValue:
        return self.eval(Path(path).read_text(encoding="utf-8"))

    def run(self, code: str) -> EvalOutcome:
        """Parse all of `code`, then evaluate form by form until the first error.

        A parse error anywhere means nothing is evaluated. Errors are returned,
        not raised.
        """
        outcome = EvalOutcome()
        try:
            forms = read_all(code)
        except MiniLispError as ex:
            outcome.error = ex
            return outcome
        for expr in forms:
            try:
                outcome.results.append(evaluate(expr, self.env))
            except MiniLispError as ex:
                logger.debug("form %s failed: %s", expr, ex)
                outcome.error = ex
                break
        return outcome

    def run_file(self, path: Path | str) -> EvalOutcome:
        return self.run(Path(path).read_text(encoding="utf-8"))
