"""Exports the transaction as a wallet-connect request for an external wallet."""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, TextIO

from ..errors import SubmissionFailure
from ..models import TransactionRequest

logger = logging.getLogger(__name__)


class TonConnectExporter:
    """Write ``sendTransaction`` requests as JSON for a wallet to sign.

    Writes to ``output`` when given, otherwise to ``stream`` (stdout).
    """

    def __init__(self, output: str | Path | None = None, stream: TextIO | None = None) -> None:
        self.output = Path(output) if output is not None else None
        self.stream = stream

    async def send_transaction(self, request: TransactionRequest) -> dict[str, Any]:
        data = request.to_dict()
        text = json.dumps(data, indent=2)

        if self.output is None:
            stream = self.stream or sys.stdout
            stream.write(text + "\n")
            stream.flush()
            return data

        try:
            self.output.write_text(text + "\n")
        except OSError as e:
            raise SubmissionFailure(f"Could not write transaction request: {e}") from e
        logger.info("Transaction request written to %s", self.output)
        return data
