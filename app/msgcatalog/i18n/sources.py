"""Catalog source providers.

Defines the contract for supplying raw catalog sources and locale settings,
and provides the YAML directory implementation.
"""

import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import yaml
from pydantic import ValidationError

from msgcatalog.i18n.models import LocaleSettings, RawSource
from msgcatalog.logging import get_module_logger

logger = get_module_logger()

# Top-level keys that describe the catalog rather than hold messages
RESERVED_KEYS = frozenset({"parent"})

# Client locale codes that may ship as bundled default files
KNOWN_LANGUAGE_CODES = (
    "af_za", "ar_sa", "ast_es", "az_az", "ba_ru", "bar", "be_by", "bg_bg",
    "br_fr", "brb", "bs_ba", "ca_es", "cs_cz", "cy_gb", "da_dk", "de_at",
    "de_ch", "de_de", "el_gr", "en_au", "en_ca", "en_gb", "en_nz", "en_pt",
    "en_ud", "en_us", "enp", "enws", "eo_uy", "es_ar", "es_cl", "es_ec",
    "es_es", "es_mx", "es_uy", "es_ve", "esan", "et_ee", "eu_es", "fa_ir",
    "fi_fi", "fil_ph", "fo_fo", "fr_ca", "fr_fr", "fra_de", "fy_nl", "ga_ie",
    "gd_gb", "gl_es", "got_de", "gv_im", "haw_us", "he_il", "hi_in", "hr_hr",
    "hu_hu", "hy_am", "id_id", "ig_ng", "io_en", "is_is", "isv", "it_it",
    "ja_jp", "jbo_en", "ka_ge", "kab_kab", "kk_kz", "kn_in", "ko_kr", "ksh",
    "kw_gb", "la_la", "lb_lu", "li_li", "lol_us", "lt_lt", "lv_lv", "mi_nz",
    "mk_mk", "mn_mn", "moh_ca", "ms_my", "mt_mt", "nds_de", "nl_be", "nl_nl",
    "nn_no", "no_no", "nb_no", "nuk", "oc_fr", "oj_ca", "ovd", "pl_pl",
    "pt_br", "pt_pt", "qya_aa", "ro_ro", "rpr", "ru_ru", "scn", "se_no",
    "sk_sk", "sl_si", "so_so", "sq_al", "sr_sp", "sv_se", "swg", "sxu", "szl",
    "ta_in", "th_th", "tl_ph", "tlh_aa", "tr_tr", "tt_ru", "tzl_tzl", "uk_ua",
    "val_es", "vec_it", "vi_vn", "yi_de", "yo_ng", "zh_cn", "zh_hk", "zh_tw",
)


def flatten_entries(data: Dict[Any, Any], prefix: str = "") -> Iterator[Tuple[str, Any]]:
    """Flatten nested mappings into dot-separated keys.

    ``{"a": {"b": "x"}, "c": ["1", "2"]}`` yields ``("a.b", "x")`` and
    ``("c", ["1", "2"])``. Sections themselves are not yielded.

    Args:
        data: Parsed YAML mapping.
        prefix: Key path of the enclosing section.

    Yields:
        (key, value) pairs for every non-mapping leaf.
    """
    for raw_key, value in data.items():
        key = f"{prefix}{raw_key}"
        if isinstance(value, dict):
            yield from flatten_entries(value, prefix=f"{key}.")
        else:
            yield key, value


class SourceProvider(ABC):
    """Abstract supplier of catalog sources and locale settings.

    Implementations read whatever storage backs the catalogs; the loader and
    registry only see RawSource records and LocaleSettings.
    """

    @abstractmethod
    def load_sources(self) -> List[RawSource]:
        """Read every catalog source for one reload cycle.

        Returns:
            List of RawSource records. Unreadable sources are omitted.
        """
        pass

    @abstractmethod
    def load_settings(self) -> LocaleSettings:
        """Read the locale settings for one reload cycle.

        Returns:
            LocaleSettings; defaults when the settings cannot be read.
        """
        pass


class YAMLSourceProvider(SourceProvider):
    """Provider for a folder of YAML catalog files.

    Expects the layout:
        <data_dir>/<settings_file>
        <data_dir>/<language_folder>/<code><suffix>

    Attributes:
        data_dir: Base data folder.
        language_dir: Folder holding catalog files.
        settings_path: Locale settings file.
        suffix: File name suffix stripped to derive catalog codes.
    """

    def __init__(
        self,
        data_dir: Path,
        language_folder: str = "language",
        settings_file: str = "language.yml",
        suffix: str = ".lang.yml",
    ):
        """Initialize YAML source provider.

        Args:
            data_dir: Base data folder.
            language_folder: Catalog folder name, relative to data_dir.
            settings_file: Settings file name, relative to data_dir.
            suffix: Catalog file name suffix.
        """
        if not suffix:
            raise ValueError("Catalog file suffix must not be empty")

        self.data_dir = Path(data_dir)
        self.language_dir = self.data_dir / language_folder
        self.settings_path = self.data_dir / settings_file
        self.suffix = suffix

        logger.info(
            "initialized_yaml_source_provider",
            data_dir=str(self.data_dir),
            language_dir=str(self.language_dir),
            suffix=suffix,
        )

    def code_for(self, path: Path) -> Optional[str]:
        """Derive a catalog code from a catalog file name.

        Args:
            path: Catalog file path.

        Returns:
            File name with the suffix stripped, or None if nothing is left.
        """
        name = path.name
        if not name.endswith(self.suffix):
            return None
        return name[: -len(self.suffix)] or None

    def load_sources(self) -> List[RawSource]:
        """Read all catalog files in the language folder.

        Returns:
            One RawSource per readable file, in file name order.
        """
        if not self.language_dir.is_dir():
            logger.warning(
                "language_folder_missing",
                language_dir=str(self.language_dir),
            )
            return []

        files = sorted(self.language_dir.glob(f"*{self.suffix}"))
        if not files:
            logger.warning(
                "no_catalog_files_found",
                language_dir=str(self.language_dir),
                suffix=self.suffix,
            )
            return []

        sources = []
        for path in files:
            source = self._read_source(path)
            if source is not None:
                sources.append(source)

        logger.info(
            "read_catalog_sources",
            file_count=len(files),
            source_count=len(sources),
        )
        return sources

    def _read_source(self, path: Path) -> Optional[RawSource]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning("catalog_file_unreadable", file=str(path), error=str(e))
            return None

        if data is None:
            data = {}
        if not isinstance(data, dict):
            logger.warning("invalid_catalog_format", file=str(path), expected="dict")
            return None

        parent_code = data.get("parent")
        if isinstance(parent_code, (dict, list)):
            logger.warning("invalid_parent_declaration", file=str(path))
            return None
        if parent_code is not None:
            parent_code = str(parent_code).strip() or None

        entries = [
            (key, value)
            for key, value in flatten_entries(data)
            if key not in RESERVED_KEYS
        ]
        return RawSource(
            code=self.code_for(path),
            parent_code=parent_code,
            entries=entries,
            origin=str(path),
        )

    def load_settings(self) -> LocaleSettings:
        """Read the locale settings file.

        Returns:
            Parsed LocaleSettings, or defaults when the file is missing or
            malformed.
        """
        if not self.settings_path.is_file():
            logger.warning("locale_settings_missing", file=str(self.settings_path))
            return LocaleSettings()

        try:
            with open(self.settings_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ValueError("settings document is not a mapping")
            return LocaleSettings.model_validate(data)
        except (OSError, yaml.YAMLError, ValidationError, ValueError) as e:
            logger.warning(
                "locale_settings_invalid",
                file=str(self.settings_path),
                error=str(e),
            )
            return LocaleSettings()

    def save_default_files(self, bundled_dir: Path) -> List[Path]:
        """Copy bundled default files into the data folder.

        The settings file is copied when absent. Catalog files are only
        copied when the language folder does not exist yet, so operator
        edits and deletions are never overwritten.

        Args:
            bundled_dir: Folder laid out like data_dir holding the defaults.

        Returns:
            Paths of the files that were written.

        Raises:
            OSError: If the data or language folder cannot be created.
        """
        bundled_dir = Path(bundled_dir)
        written: List[Path] = []

        self.data_dir.mkdir(parents=True, exist_ok=True)

        bundled_settings = bundled_dir / self.settings_path.name
        if not self.settings_path.exists() and bundled_settings.is_file():
            shutil.copyfile(bundled_settings, self.settings_path)
            written.append(self.settings_path)

        if self.language_dir.exists():
            logger.debug("language_folder_exists", language_dir=str(self.language_dir))
            return written

        self.language_dir.mkdir(parents=True)
        bundled_language_dir = bundled_dir / self.language_dir.name
        for code in KNOWN_LANGUAGE_CODES:
            bundled_file = bundled_language_dir / f"{code}{self.suffix}"
            if bundled_file.is_file():
                target = self.language_dir / bundled_file.name
                shutil.copyfile(bundled_file, target)
                written.append(target)

        logger.info(
            "saved_default_language_files",
            data_dir=str(self.data_dir),
            file_count=len(written),
        )
        return written
