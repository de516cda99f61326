"""Archive extraction for downloaded dictionary releases.

Unpacks a gzipped tarball as a stream, refusing members that would
land outside the destination directory.
"""

import logging
import shutil
import tarfile
import zlib
from pathlib import Path
from typing import List, Optional, Union

from jmdict_kana.exceptions import ExtractionError

logger = logging.getLogger("jmdict_kana.extractor")


class ArchiveExtractor:
    """Extracts .tgz release archives into a directory."""

    def __init__(self, mode: str = "r|gz"):
        """
        Initialize the extractor.

        Args:
            mode: tarfile open mode; the default reads a gzip stream
        """
        self._mode = mode

    def _safe_target(self, dest_root: Path, member: tarfile.TarInfo) -> Optional[Path]:
        """Resolve where a member would be written, or None if it escapes dest_root."""
        target = (dest_root / member.name).resolve()
        if target != dest_root and dest_root not in target.parents:
            logger.warning(f"Attempted path traversal: {member.name}")
            return None
        return target

    def extract(self, archive_path: Union[str, Path], dest_dir: Union[str, Path]) -> List[str]:
        """
        Extract an archive into a destination directory.

        Members are processed in stream order. Members whose path escapes
        dest_dir, and members that are neither files nor directories, are
        skipped with a warning.

        Args:
            archive_path: Path to the .tgz archive
            dest_dir: Existing directory to extract into

        Returns:
            Member names (files and directories) in encounter order

        Raises:
            ExtractionError: If inputs are missing or the archive cannot be read
        """
        archive_path = Path(archive_path)
        dest_dir = Path(dest_dir)
        if not archive_path.is_file():
            raise ExtractionError(str(archive_path), "archive file does not exist")
        if not dest_dir.is_dir():
            raise ExtractionError(str(archive_path), f"destination '{dest_dir}' does not exist")

        dest_root = dest_dir.resolve()
        entries: List[str] = []

        try:
            with tarfile.open(archive_path, self._mode) as tar:
                for member in tar:
                    if not (member.isfile() or member.isdir()):
                        logger.warning(f"Skipping unsupported member type: {member.name}")
                        continue

                    target = self._safe_target(dest_root, member)
                    if target is None:
                        continue

                    if member.isdir():
                        target.mkdir(parents=True, exist_ok=True)
                    else:
                        target.parent.mkdir(parents=True, exist_ok=True)
                        source = tar.extractfile(member)
                        with source, open(target, "wb") as dst:
                            shutil.copyfileobj(source, dst)

                    logger.debug(f"Extracted {member.name}")
                    entries.append(member.name)
        except (tarfile.TarError, zlib.error, EOFError, OSError) as e:
            logger.error(f"Error extracting '{archive_path}': {e}")
            raise ExtractionError(str(archive_path), type(e).__name__, e)

        logger.info(f"Unpacked {len(entries)} entries to '{dest_dir}'")
        return entries
