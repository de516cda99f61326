"""Unit tests for ArchiveExtractor."""

import io
import os
import tarfile
import pytest

from jmdict_kana.exceptions import ExtractionError
from jmdict_kana.updater.extractor import ArchiveExtractor

from tests.conftest import make_tarball


class TestArchiveExtractor:
    """Tests for ArchiveExtractor."""

    @pytest.fixture
    def extractor(self):
        """Create an ArchiveExtractor instance."""
        return ArchiveExtractor()

    def test_extract_single_file(self, extractor, sample_archive, data_dir, sample_dictionary_bytes):
        """Test extracting a release-shaped archive."""
        entries = extractor.extract(sample_archive, data_dir)

        assert entries == ["jmdict-all-3.6.1.json"]
        assert (data_dir / "jmdict-all-3.6.1.json").read_bytes() == sample_dictionary_bytes

    def test_extract_preserves_order_with_directories(self, extractor, tmp_path, data_dir):
        """Test that directories and files are reported in encounter order."""
        archive = make_tarball(
            tmp_path / "nested.tgz",
            {"pkg/b.json": b"{}", "pkg/a.json": b"[]"},
            directories=["pkg"],
        )

        entries = extractor.extract(archive, data_dir)

        assert entries == ["pkg", "pkg/b.json", "pkg/a.json"]
        assert (data_dir / "pkg").is_dir()
        assert (data_dir / "pkg" / "a.json").read_bytes() == b"[]"

    def test_creates_missing_parent_directories(self, extractor, tmp_path, data_dir):
        """Test files whose parent directory has no member of its own."""
        archive = make_tarball(tmp_path / "deep.tgz", {"a/b/c.txt": b"deep"})

        assert extractor.extract(archive, data_dir) == ["a/b/c.txt"]
        assert (data_dir / "a" / "b" / "c.txt").read_bytes() == b"deep"

    def test_path_traversal_skipped(self, extractor, tmp_path):
        """Test that escaping entries are skipped and siblings still extract."""
        dest = tmp_path / "nested" / "dest"
        dest.mkdir(parents=True)
        archive = make_tarball(
            tmp_path / "evil.tgz",
            {
                "good1.txt": b"one",
                "../../etc/passwd": b"root:x:0:0",
                "../escape.txt": b"nope",
                "good2.txt": b"two",
            },
        )

        entries = extractor.extract(archive, dest)

        assert entries == ["good1.txt", "good2.txt"]
        assert (dest / "good1.txt").read_bytes() == b"one"
        assert (dest / "good2.txt").read_bytes() == b"two"
        assert not (tmp_path / "nested" / "escape.txt").exists()
        assert not (tmp_path / "etc" / "passwd").exists()

    def test_absolute_path_skipped(self, extractor, tmp_path, data_dir):
        """Test that absolute member names are skipped."""
        outside = tmp_path / "outside.txt"
        archive = make_tarball(
            tmp_path / "abs.tgz",
            {str(outside): b"nope", "ok.txt": b"ok"},
        )

        entries = extractor.extract(archive, data_dir)

        assert entries == ["ok.txt"]
        assert not outside.exists()

    def test_prefix_sibling_directory_skipped(self, extractor, tmp_path, data_dir):
        """Test that a sibling folder sharing the destination prefix is not reachable."""
        archive = make_tarball(tmp_path / "sibling.tgz", {"../data-evil/x.txt": b"nope"})

        assert extractor.extract(archive, data_dir) == []
        assert not (tmp_path / "data-evil").exists()

    def test_symlink_skipped(self, extractor, tmp_path, data_dir):
        """Test that link members are not extracted."""
        archive = tmp_path / "link.tgz"
        with tarfile.open(archive, "w:gz") as tar:
            link = tarfile.TarInfo("link")
            link.type = tarfile.SYMTYPE
            link.linkname = "/etc/passwd"
            tar.addfile(link)
            info = tarfile.TarInfo("file.txt")
            info.size = 2
            tar.addfile(info, io.BytesIO(b"ok"))

        entries = extractor.extract(archive, data_dir)

        assert entries == ["file.txt"]
        assert not (data_dir / "link").exists()

    def test_missing_archive(self, extractor, tmp_path, data_dir):
        """Test that a missing archive fails."""
        with pytest.raises(ExtractionError):
            extractor.extract(tmp_path / "missing.tgz", data_dir)

    def test_missing_destination(self, extractor, sample_archive, tmp_path):
        """Test that a missing destination fails."""
        with pytest.raises(ExtractionError):
            extractor.extract(sample_archive, tmp_path / "missing")

    def test_not_gzip(self, extractor, tmp_path, data_dir):
        """Test that a non-gzip file fails to decompress."""
        archive = tmp_path / "bad.tgz"
        archive.write_bytes(b"this is not a gzip stream at all")

        with pytest.raises(ExtractionError) as exc_info:
            extractor.extract(archive, data_dir)
        assert exc_info.value.archive_path == str(archive)

    def test_truncated_archive(self, extractor, tmp_path, data_dir):
        """Test that a truncated archive aborts extraction."""
        archive = make_tarball(tmp_path / "full.tgz", {"big.bin": os.urandom(200_000)})
        truncated = tmp_path / "truncated.tgz"
        truncated.write_bytes(archive.read_bytes()[:2000])

        with pytest.raises(ExtractionError):
            extractor.extract(truncated, data_dir)

    def test_accepts_str_paths(self, extractor, sample_archive, data_dir):
        """Test that plain string paths are accepted."""
        entries = extractor.extract(str(sample_archive), str(data_dir))
        assert entries == ["jmdict-all-3.6.1.json"]
