"""
Batch Execution

Runs a block of SQL text (one typed line, a `source` file or a --file/--execute
argument) through segmentation, classification and dispatch, in source order.
"""

import logging

from camusql.commands._render import Presenter
from camusql.core.dispatcher import dispatch_statement
from camusql.core.session import SessionState
from camusql.core.sql_utils import iter_statements
from camusql.domain.errors import TransactionStateError

log = logging.getLogger(__name__)


def run_batch(session: SessionState, sql_text: str, presenter: Presenter) -> bool:
    """Dispatch every statement in `sql_text` and report each outcome.

    Blank statements are skipped. Illegal transaction transitions are reported
    and the batch continues. Any other failure is reported and the remaining
    statements of the batch are skipped. Interrupts (KeyboardInterrupt,
    ShutdownRequested) are not handled here and stop the batch immediately.

    Args:
        session: Current session
        sql_text: Raw SQL text
        presenter: Receives rows, outcomes and errors

    Returns:
        True if every statement succeeded
    """
    success = True
    for index, statement in enumerate(iter_statements(sql_text), 1):
        if not statement:
            continue

        try:
            outcome = dispatch_statement(session, statement, presenter)
        except TransactionStateError as e:
            presenter.notice(str(e))
            success = False
            continue
        except Exception as e:
            log.debug("Statement %d failed: %s", index, statement, exc_info=True)
            presenter.report_error(e)
            return False

        presenter.report(outcome)

    return success
