"""Fixed value sets of the Citation File Format 1.0.3.

The sets are read-only after import and safe to share across threads.
Language codes live in data/languages.yaml and are loaded once, on
first use.
"""

from functools import lru_cache
from importlib import resources
from typing import FrozenSet

import yaml

CFF_VERSION = "1.0.3"
CFF_FILE_NAME = "CITATION.cff"

ORCID_URL_PATTERN = r"https://orcid\.org/\d{4}-\d{4}-\d{4}-\d{4}"
# Human-readable form used in error messages.
ORCID_URL_PATTERN_DISPLAY = "https://orcid.org/[0-9]{4}-[0-9]{4}-[0-9]{4}-[0-9]{4}"

# Protocols accepted in URL fields.
URL_SCHEMES: FrozenSet[str] = frozenset({"http", "https", "ftp", "file", "mailto", "jar"})

REFERENCE_TYPES: FrozenSet[str] = frozenset({
    "art", "article", "audiovisual", "bill", "blog", "book", "catalogue",
    "conference", "conference-paper", "data", "database", "dictionary",
    "edited-work", "encyclopedia", "film-broadcast", "generic",
    "government-document", "grant", "hearing", "historical-work",
    "legal-case", "legal-rule", "magazine-article", "manual", "map",
    "multimedia", "music", "newspaper-article", "pamphlet", "patent",
    "personal-communication", "proceedings", "report", "serial", "slides",
    "software", "software-code", "software-container", "software-executable",
    "software-virtual-machine", "sound-recording", "standard", "statute",
    "thesis", "unpublished", "video", "website",
})

REFERENCE_STATUSES: FrozenSet[str] = frozenset({
    "in-preparation", "abstract", "submitted", "in-press", "advance-online", "preprint",
})

# ISO 3166-1 alpha-2
COUNTRIES: FrozenSet[str] = frozenset("""
    AF AX AL DZ AS AD AO AI AQ AG AR AM AW AU AT AZ BS BH BD BB BY BE
    BZ BJ BM BT BO BQ BA BW BV BR IO BN BG BF BI CV KH CM CA KY CF TD
    CL CN CX CC CO KM CG CD CK CR CI HR CU CW CY CZ DK DJ DM DO EC EG
    SV GQ ER EE ET FK FO FJ FI FR GF PF TF GA GM GE DE GH GI GR GL GD
    GP GU GT GG GN GW GY HT HM VA HN HK HU IS IN ID IR IQ IE IM IL IT
    JM JP JE JO KZ KE KI KP KR KW KG LA LV LB LS LR LY LI LT LU MO MK
    MG MW MY MV ML MT MH MQ MR MU YT MX FM MD MC MN ME MS MA MZ MM NA
    NR NP NL NC NZ NI NE NG NU NF MP NO OM PK PW PS PA PG PY PE PH PN
    PL PT PR QA RE RO RU RW BL SH KN LC MF PM VC WS SM ST SA SN RS SC
    SL SG SX SK SI SB SO ZA GS SS ES LK SD SR SJ SZ SE CH SY TW TJ TZ
    TH TL TG TK TO TT TN TR TM TC TV UG UA AE GB UM US UY UZ VU VE VN
    VG VI WF EH YE ZM ZW
""".split())


@lru_cache(maxsize=1)
def languages() -> FrozenSet[str]:
    """Return all ISO 639-1 and ISO 639-3 codes as one flat set."""
    text = resources.files("cffreader.core").joinpath("data/languages.yaml").read_text(encoding="utf-8")
    table = yaml.safe_load(text)
    codes = set()
    for group in table.values():
        codes.update(group)
    return frozenset(codes)
