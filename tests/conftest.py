import pytest

from tests.fakes import FakeAnnotator, FakeFetcher, FakeTranslator


@pytest.fixture
def translator():
    return FakeTranslator()


@pytest.fixture
def annotator():
    return FakeAnnotator()


@pytest.fixture
def fetcher():
    return FakeFetcher()
