import pytest

from grid_fidelity import Document, build_reference_document


def pytest_addoption(parser):
    parser.addoption(
        "--max-check-fails",
        default=False,
        type=int,
        help="maximum number of pytest.check failures",
    )


@pytest.fixture(name="reference_document")
def reference_document_fixture():
    return build_reference_document()


@pytest.fixture(name="reference_sheet")
def reference_sheet_fixture(reference_document):
    return reference_document.sheets["blort"]


@pytest.fixture(name="empty_sheet")
def empty_sheet_fixture():
    return Document().add_sheet("blort")
