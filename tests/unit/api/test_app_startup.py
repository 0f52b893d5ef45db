import logging
from collections.abc import Iterator

import pytest
from loguru import logger

from src.inventory.api.utils.app_startup import configure_logging


@pytest.fixture
def captured() -> Iterator[list[str]]:
    configure_logging()
    lines: list[str] = []
    sink_id = logger.add(
        lines.append,
        format="{extra[request_id]} {extra[method]} {extra[path]} {message}",
    )
    yield lines
    logger.remove(sink_id)


class TestConfigureLogging:
    def test_request_fields_outside_a_request(self, captured: list[str]):
        logger.info("startup")

        assert captured[-1].strip() == "- - - startup"

    def test_request_fields_inside_a_request(self, captured: list[str]):
        with logger.contextualize(request_id="r-1", method="GET", path="/api/products"):
            logger.info("listing")

        assert captured[-1].strip() == "r-1 GET /api/products listing"

    def test_stdlib_records_are_routed(self, captured: list[str]):
        logging.getLogger("inventory.tests").warning("from stdlib")

        assert captured[-1].strip() == "- - - from stdlib"
