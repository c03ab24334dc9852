from __future__ import annotations

import pytest

from tests.factories import freeze, make_result, make_violation
from vpat.generator import Generator
from vpat.models import ProductInfo, Report


@pytest.fixture(autouse=True)
def _no_log_file(monkeypatch):
    monkeypatch.setenv("VPAT_LOG_FILE", "")
    for name in ("BROWSER_HEADLESS", "BROWSER_TIMEOUT", "VPAT_AXE_VERSION", "VPAT_HOST_VERSION"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def product() -> ProductInfo:
    return ProductInfo(name="Acme")


@pytest.fixture
def generator(product: ProductInfo) -> Generator:
    return Generator(product)


@pytest.fixture
def empty_report(generator: Generator) -> Report:
    return freeze(generator.generate([]))


@pytest.fixture
def image_alt_report(generator: Generator) -> Report:
    """One critical image-alt violation on a single page"""
    result = make_result(violations=[make_violation("image-alt", "critical", ["<img src=x>"])])
    return freeze(generator.generate([result]))


@pytest.fixture
def mixed_report() -> Report:
    gen = Generator(ProductInfo(name="Example Site", version="2.1", vendor="Example Corp",
                                url="https://example.com", description="Marketing site"))
    gen.set_evaluator("QA Team")
    gen.set_scope("Public pages")
    results = [
        make_result("https://example.com", [
            make_violation("image-alt", "critical", ["<img src=a>", "<img src=b>"]),
            make_violation("color-contrast", "serious", ["<p>1</p>", "<p>2</p>", "<p>3</p>", "<p>4</p>"]),
        ]),
        make_result("https://example.com/about", [
            make_violation("meta-refresh", "moderate", ['<meta http-equiv="refresh">']),
            make_violation("button-name", "minor", ["<button></button>"]),
        ]),
    ]
    return freeze(gen.generate(results))
