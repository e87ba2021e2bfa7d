# coding: utf-8
"""
Adapter letting the dispatcher read XCSP3 inputs like the other formats.
"""
import logging

from combparse.backends.base import CspBackend
from combparse.core.abstract_parser import AbstractParser
from combparse.global_params import global_config
from combparse.xcsp.callback import XcspCallback
from combparse.xcsp.reader import XcspReader

logger = logging.getLogger(__name__)


class XcspParser(AbstractParser[CspBackend]):
    """Streams the rest of the input into the XML reader."""

    def parse(self) -> None:
        # the factory is chosen once, by the backend in use
        callback = XcspCallback(self.solver, self.solver.intension_factory)
        reader = XcspReader(callback)

        chunk = self.scanner.read_chunk(global_config.chunk_size)
        while chunk:
            reader.feed(chunk)
            chunk = self.scanner.read_chunk(global_config.chunk_size)
        reader.close()

        self.number_of_variables = callback.nb_variables
        self.number_of_constraints = callback.nb_constraints
        logger.debug("XCSP3 instance loaded into %s", type(self.solver).__name__)
