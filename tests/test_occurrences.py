import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from ipdwindow.errors import InputFormatError  # noqa: E402
from ipdwindow.models import Occurrence  # noqa: E402
from ipdwindow.occurrences import OccurrenceReader  # noqa: E402


def test_reader_yields_occurrences_in_file_order(tmp_path: Path) -> None:
    path = tmp_path / "motifs.merged_occ"
    path.write_text("chr1 99 +\nchr2 0 -\nchr1 15 +\n")

    occurrences = list(OccurrenceReader(occ_path=path))

    assert occurrences == [
        Occurrence("chr1", 99, "+"),
        Occurrence("chr2", 0, "-"),
        Occurrence("chr1", 15, "+"),
    ]


def test_reader_keeps_numeric_looking_chromosome_names(tmp_path: Path) -> None:
    path = tmp_path / "motifs.merged_occ"
    path.write_text("1 10 +\nNA 20 -\n")

    occurrences = list(OccurrenceReader(occ_path=path))

    assert [item.ref_name for item in occurrences] == ["1", "NA"]


def test_reader_supports_custom_delimiter_and_small_chunks(tmp_path: Path) -> None:
    path = tmp_path / "motifs.tsv"
    path.write_text("chr1\t1\t+\textra\nchr1\t2\t-\tmore\nchr1\t3\t+\tlast\n")

    occurrences = list(OccurrenceReader(occ_path=path, delimiter="\t", chunksize=2))

    assert [item.start for item in occurrences] == [1, 2, 3]


def test_empty_file_yields_nothing(tmp_path: Path) -> None:
    path = tmp_path / "empty.merged_occ"
    path.write_text("")

    assert list(OccurrenceReader(occ_path=path)) == []


@pytest.mark.parametrize(
    "content",
    [
        "chr1 10 *\n",
        "chr1 ten +\n",
        "chr1 10\n",
        "chr1 10 +\nchr1 11\n",
    ],
)
def test_malformed_rows_are_fatal(tmp_path: Path, content: str) -> None:
    path = tmp_path / "bad.merged_occ"
    path.write_text(content)

    with pytest.raises(InputFormatError):
        list(OccurrenceReader(occ_path=path))


def test_missing_occurrence_file_is_an_input_error(tmp_path: Path) -> None:
    with pytest.raises(InputFormatError, match="absent.merged_occ"):
        OccurrenceReader(occ_path=tmp_path / "absent.merged_occ")
