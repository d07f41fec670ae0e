"""Conversion controller for turning a collection into a PDF file.

This module introduces :class:`ConversionController`, a small service layer
that mediates between UI widgets and the assembler/encoder pair.  It owns the
advisory "conversion in progress" flag and is the single place where
conversion failures are caught: a failed attempt is logged, leaves no file
behind and returns the controller to idle so the user can try again.  The
controller does not depend on ``QWidget`` internals and can be driven from
tests or other front ends.
"""

from __future__ import annotations

import enum
import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

from utils.validation import resolve_output_filename, validate_output_dir

from .. import config
from ..assembler import assemble
from ..encoder import PdfEncoder
from ..models import ImageRecord

logger = logging.getLogger("pdfbinder.conversion")


class ConversionState(enum.Enum):
    IDLE = "idle"
    CONVERTING = "converting"


StateListener = Callable[[ConversionState], None]


class ConversionController:
    """Run conversions and expose the idle/converting state."""

    def __init__(
        self,
        encoder: Optional[PdfEncoder] = None,
        *,
        page_size: Tuple[float, float] = config.page_dimensions(),
        margin: float = config.DEFAULT_MARGIN,
        default_name: str = config.DEFAULT_FILE_NAME,
    ) -> None:
        self._encoder = encoder or PdfEncoder()
        self._page_width, self._page_height = page_size
        self._margin = margin
        self._default_name = default_name
        self._state = ConversionState.IDLE
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> ConversionState:
        return self._state

    @property
    def is_converting(self) -> bool:
        """Return whether a conversion is currently running."""

        return self._state is ConversionState.CONVERTING

    def add_state_listener(self, listener: StateListener) -> None:
        """Call ``listener`` with the new state on every transition."""

        self._listeners.append(listener)

    def _set_state(self, state: ConversionState) -> None:
        if state is self._state:
            return
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def convert(
        self,
        records: Sequence[ImageRecord],
        file_name: Optional[str],
        output_dir: Union[str, Path],
    ) -> Optional[Path]:
        """Write ``records`` as one PDF into ``output_dir``.

        Returns the written path, or ``None`` when nothing was converted
        (empty input or a failure, which is logged).
        """

        records = list(records)
        if not records:
            logger.info("Conversion requested with no images; nothing to do")
            return None

        self._set_state(ConversionState.CONVERTING)
        try:
            target_dir = validate_output_dir(output_dir)
            target = target_dir / resolve_output_filename(file_name, self._default_name)
            document = assemble(
                records,
                self._page_width,
                self._page_height,
                self._margin,
            )
            saved = self._encoder.save(document, target)
        except Exception:
            logger.exception("Error converting %d image(s) to PDF", len(records))
            return None
        finally:
            self._set_state(ConversionState.IDLE)

        logger.info("Converted %d image(s) into %s", len(records), saved)
        return saved
