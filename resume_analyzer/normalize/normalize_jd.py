from __future__ import annotations

import logging
import re

from resume_analyzer.core.config.scoring import get_scoring_value
from resume_analyzer.schemas import ExperienceRequirement, JobRequirement, ParsedJobDescription, SalaryRange
from resume_analyzer.taxonomy import get_default_taxonomy_provider

from .keywords import collect_keywords
from .rules import ExtractionRule, first_match, regex_rule
from .utils import (
    LOCATION_PATTERN,
    TITLE_KEYWORD_RE,
    build_heading_index,
    find_section,
    is_bullet_like,
    non_empty_lines,
    normalize_line,
    strip_bullet_prefix,
)

logger = logging.getLogger(__name__)

JD_HEADINGS = build_heading_index(
    {
        "requirements": (
            "requirements",
            "required",
            "required skills",
            "required qualifications",
            "key requirements",
            "job requirements",
            "qualifications",
            "minimum qualifications",
            "basic qualifications",
            "must have",
            "must-have",
            "must haves",
            "what you'll need",
            "what you will need",
            "what you'll bring",
            "what you bring",
            "what we're looking for",
            "what we are looking for",
            "who you are",
            "your profile",
            "skills & experience",
            "skills and experience",
        ),
        "preferred": (
            "preferred",
            "preferred qualifications",
            "preferred skills",
            "nice to have",
            "nice-to-have",
            "nice to haves",
            "good to have",
            "bonus",
            "bonus points",
            "plus",
            "pluses",
            "ideal",
            "ideally",
            "desired skills",
        ),
        "responsibilities": (
            "responsibilities",
            "key responsibilities",
            "your responsibilities",
            "duties",
            "job duties",
            "what you'll do",
            "what you will do",
            "what you'll be doing",
            "your role",
            "the role",
            "about the role",
            "in this role",
            "role description",
            "day to day",
        ),
        "benefits": (
            "benefits",
            "perks",
            "perks & benefits",
            "what we offer",
            "why join us",
            "compensation",
            "compensation & benefits",
        ),
        "about": (
            "about us",
            "about the company",
            "about the team",
            "who we are",
            "company overview",
            "our company",
        ),
        "other": ("how to apply", "equal opportunity", "equal opportunity employer"),
    }
)

_REQUIRED_CUES_RE = re.compile(r"\b(?:required|must[\s-]have|essential|mandatory)\b", re.IGNORECASE)
_PREFERRED_CUES_RE = re.compile(r"\b(?:preferred|nice[\s-]to[\s-]have|bonus|plus)\b", re.IGNORECASE)
_CONTEXT_WINDOW = 100

_YEARS_SKILL_RE = re.compile(
    r"^(\d{1,2})\+?\s*(?:years?|yrs?)\s*(?:of\s+)?(?:professional\s+|hands-on\s+|commercial\s+)?"
    r"(?:experience\s+)?(?:with\s+|in\s+|using\s+)?(.+)$",
    re.IGNORECASE,
)
_PROFICIENCY_RE = re.compile(
    r"\b(?:proficiency|proficient|experience|experienced|knowledge|familiarity|familiar|expertise|skilled)"
    r"\s+(?:in|with|of)\s+(.+)$",
    re.IGNORECASE,
)
_LABEL_RE = re.compile(r"^[A-Za-z][A-Za-z &/-]{1,30}:\s*")
_CANDIDATE_SPLIT_RE = re.compile(r"\s*(?:,|;|&|\band\b|\bor\b)\s*", re.IGNORECASE)
_CANDIDATE_JUNK_RE = re.compile(
    r"\b(?:degree|related field|equivalent|bachelor'?s?|master'?s?|experience|years?|ability|"
    r"etc|similar|preferred|required|a plus|responsibilities|including)\b",
    re.IGNORECASE,
)

_TITLE_TRIM_RE = re.compile(r"\s+(?:to|who|with|that)\b.*$|(?:[,!;:(]|\.(?=\s|$)).*$", re.IGNORECASE)
_TITLE_SUFFIX_RE = re.compile(r"\s+[-–—|]\s+.*$")
_MAX_TITLE_LEN = 80
_TITLE_PHRASE_RE = re.compile(rf"(?:[A-Z][\w+#/.-]*\s+){{0,3}}(?i:{TITLE_KEYWORD_RE.pattern})")

_RANGE_SEP = r"\s*(?:-|–|—|to)\s*"
_CURRENCY_SYMBOLS = {"$": "USD", "€": "EUR", "£": "GBP"}


def _clean_title(value: str) -> str | None:
    title = normalize_line(_TITLE_SUFFIX_RE.sub("", value)).strip(" ,.-")
    if not title or len(title) > _MAX_TITLE_LEN:
        return None
    return title


def _labelled_title(match: re.Match[str]) -> str | None:
    return _clean_title(match.group(1))


def _sentence_title(match: re.Match[str]) -> str | None:
    title = _TITLE_TRIM_RE.sub("", match.group(1))
    if not TITLE_KEYWORD_RE.search(title):
        return None
    return _clean_title(title)


def _title_rule(name: str, pattern: str, build=_sentence_title) -> ExtractionRule[str]:
    return regex_rule(name, re.compile(pattern, re.IGNORECASE | re.MULTILINE), build)


TITLE_RULES = (
    _title_rule("title_label", r"^[ \t]*(?:job[ \t]+)?title[ \t]*:[ \t]*(.+)$", _labelled_title),
    _title_rule("position_label", r"^[ \t]*(?:position|role)[ \t]*:[ \t]*(.+)$", _labelled_title),
    _title_rule("we_are_hiring", r"\bwe(?:'re|\s+are)\s+hiring\s+(?:an?\s+)?([^\n]+)"),
    _title_rule("hiring", r"\bhiring\s+(?:an?\s+)?([^\n]+)"),
    _title_rule("looking_for", r"\blooking\s+for\s+(?:an?\s+)?([^\n]+)"),
    _title_rule("seeking", r"\bseeking\s+(?:an?\s+)?([^\n]+)"),
    _title_rule("join_us_as", r"\bjoin\s+(?:us|our\s+team)\s+as\s+(?:an?\s+)?([^\n]+)"),
)

_COMPANY_STOP = {"us", "the role", "the company", "the team", "you", "the job", "this role", "the position"}


def _company(match: re.Match[str]) -> str | None:
    value = normalize_line(match.group(1)).strip(" .,:")
    if not 2 <= len(value) <= 60 or value.lower() in _COMPANY_STOP:
        return None
    return value


def _first_line_suffix(text: str) -> str | None:
    lines = non_empty_lines(text.splitlines())
    if not lines:
        return None
    match = re.search(r"\s+(?:[-–—|@]|at)\s+([A-Z][^|\n]*)$", lines[0])
    if not match or not TITLE_KEYWORD_RE.search(lines[0][: match.start()]):
        return None
    return _company(match)


COMPANY_RULES = (
    regex_rule("company_label", re.compile(r"^[ \t]*(?:company|employer)[ \t]*:[ \t]*(.+)$", re.I | re.M), _company),
    ExtractionRule("title_line_suffix", _first_line_suffix),
    regex_rule("about_heading", re.compile(r"^[ \t]*about[ \t]+([A-Z][\w&.' -]{1,40}?)[ \t]*:?[ \t]*$", re.M), _company),
    regex_rule(
        "join_or_at_name",
        re.compile(r"\b(?i:join|at)\s+([A-Z][\w&.-]*(?:\s+[A-Z][\w&.-]*){0,3})(?=[,.!]|\s+(?:is|are|we)\b)"),
        _company,
    ),
)

LOCATION_RULES = (
    regex_rule("location_label", re.compile(r"^[ \t]*location[ \t]*:[ \t]*(.+)$", re.I | re.M)),
    regex_rule("based_in", re.compile(rf"\b(?:located|based)\s+in\s+((?:{LOCATION_PATTERN})|[A-Z][A-Za-z.]+(?:\s+[A-Z][A-Za-z.]+)*)")),
    regex_rule("city_state", re.compile(rf"(?:^[ \t]*|[|•·(][ \t]*)({LOCATION_PATTERN})\b", re.M)),
    regex_rule("remote", re.compile(r"\b(?:fully\s+)?(remote)\b", re.I), lambda match: "Remote"),
)

EMPLOYMENT_TYPE_RULES = (
    regex_rule("full_time", re.compile(r"\bfull[\s-]?time\b", re.I), lambda match: "full-time"),
    regex_rule("part_time", re.compile(r"\bpart[\s-]?time\b", re.I), lambda match: "part-time"),
    regex_rule("contract", re.compile(r"\b(?:contract|contractor|freelance)\b", re.I), lambda match: "contract"),
    regex_rule("remote", re.compile(r"\b(?:remote[\s-]only|fully[\s-]remote|100%\s+remote)\b", re.I), lambda match: "remote"),
)


def _range(min_years: int, max_years: int | None = None) -> ExperienceRequirement:
    return ExperienceRequirement(min=min_years, max=max_years)


EXPERIENCE_RULES = (
    regex_rule(
        "years_range",
        re.compile(r"(?<!\d)(\d{1,2})\s*(?:-|–|—|to)\s*(\d{1,2})\+?\s*(?:years?|yrs?)\b", re.I),
        lambda match: _range(int(match.group(1)), int(match.group(2))),
    ),
    regex_rule(
        "years_plus",
        re.compile(r"(?<!\d)(\d{1,2})\+?\s*(?:years?|yrs?)\b", re.I),
        lambda match: _range(int(match.group(1))),
    ),
    regex_rule(
        "at_least_years",
        re.compile(r"\b(?:at\s+least|minimum(?:\s+of)?|min\.?)\s+(\d{1,2})\s*(?:years?|yrs?)\b", re.I),
        lambda match: _range(int(match.group(1))),
    ),
)


def _amount(raw: str, thousands: str | None) -> int:
    value = float(raw.replace(",", ""))
    if thousands or value < 1000:
        value *= 1000
    return int(round(value))


def _salary(match: re.Match[str]) -> SalaryRange:
    symbol = next((char for char in match.group(0) if char in _CURRENCY_SYMBOLS), "$")
    return SalaryRange(
        min=_amount(match.group("low"), match.group("low_k")),
        max=_amount(match.group("high"), match.group("high_k")),
        currency=_CURRENCY_SYMBOLS[symbol],
    )


SALARY_RULES = (
    regex_rule(
        "symbol_range",
        re.compile(
            r"[$€£]\s*(?P<low>\d[\d,]*(?:\.\d+)?)\s*(?P<low_k>[kK])?"
            rf"{_RANGE_SEP}[$€£]?\s*(?P<high>\d[\d,]*(?:\.\d+)?)\s*(?P<high_k>[kK])?"
        ),
        _salary,
    ),
    regex_rule(
        "labelled_range",
        re.compile(
            r"\b(?:salary|compensation|pay)(?:\s+range)?\s*[:\-]?\s*[$€£]?\s*(?P<low>\d[\d,]*(?:\.\d+)?)\s*(?P<low_k>[kK])?"
            rf"{_RANGE_SEP}[$€£]?\s*(?P<high>\d[\d,]*(?:\.\d+)?)\s*(?P<high_k>[kK])?",
            re.IGNORECASE,
        ),
        _salary,
    ),
)


def extract_title(raw_text: str) -> str:
    title = first_match(TITLE_RULES, raw_text)
    if title:
        return title
    lines = non_empty_lines(raw_text.splitlines())
    for line in lines[:5]:
        if not TITLE_KEYWORD_RE.search(line):
            continue
        if len(line) < 60:
            cleaned = _clean_title(line)
            if cleaned:
                return cleaned
        phrase = _TITLE_PHRASE_RE.search(line)
        if phrase:
            return normalize_line(phrase.group(0))
    if lines and 5 < len(lines[0]) < 80:
        return lines[0]
    return "Position"


def _candidate_skills(line: str) -> tuple[list[str], int | None]:
    text = _LABEL_RE.sub("", strip_bullet_prefix(line), count=1)
    years: int | None = None
    years_match = _YEARS_SKILL_RE.match(text)
    proficiency = _PROFICIENCY_RE.search(text)
    if years_match:
        years = int(years_match.group(1))
        text = years_match.group(2)
    elif proficiency:
        text = proficiency.group(1)
    elif "," not in text and (not is_bullet_like(line) or len(text.split()) > 4 or len(text) > 40):
        return [], None
    text = re.split(r"\.(?=\s|$)|[(:]", text, maxsplit=1)[0]

    candidates: list[str] = []
    for token in _CANDIDATE_SPLIT_RE.split(text):
        cleaned = normalize_line(token).strip(" .:-*")
        if not 2 <= len(cleaned) <= 40 or len(cleaned.split()) > 4:
            continue
        if not (cleaned[0].isalpha() or cleaned[0] == ".") or _CANDIDATE_JUNK_RE.search(cleaned):
            continue
        candidates.append(cleaned)
    return candidates, years


def _section_requirements(section: list[str] | None, level: str) -> list[JobRequirement]:
    requirements: list[JobRequirement] = []
    for line in non_empty_lines(section or []):
        candidates, years = _candidate_skills(line)
        for skill in candidates:
            requirements.append(JobRequirement(skill=skill, level=level, years=years))
    return requirements


def _line_bounds(text: str, start: int, end: int) -> tuple[int, int]:
    line_start = text.rfind("\n", 0, start) + 1
    line_end = text.find("\n", end)
    return line_start, len(text) if line_end == -1 else line_end


def _known_skill_level(raw_text: str, match: re.Match[str], preferred_lines: set[str]) -> str:
    line_start, line_end = _line_bounds(raw_text, match.start(), match.end())
    if normalize_line(raw_text[line_start:line_end]) in preferred_lines:
        return "preferred"
    window = raw_text[max(line_start, match.start() - _CONTEXT_WINDOW) : min(line_end, match.end() + _CONTEXT_WINDOW)]
    if _REQUIRED_CUES_RE.search(window):
        return "required"
    if _PREFERRED_CUES_RE.search(window):
        return "preferred"
    return "required"


def _skill_years(raw_text: str, skill: str) -> int | None:
    pattern = (
        r"(\d+)\+?\s*(?:years?|yrs?)\s*(?:of\s+)?(?:experience\s+)?(?:with\s+|in\s+)?"
        rf"{re.escape(skill)}(?![\w+#])"
    )
    match = re.search(pattern, raw_text, flags=re.IGNORECASE)
    return int(match.group(1)) if match else None


def extract_skill_requirements(raw_text: str, lines: list[str]) -> tuple[list[JobRequirement], list[JobRequirement]]:
    taxonomy = get_default_taxonomy_provider()
    required_section = find_section(lines, "requirements", JD_HEADINGS)
    preferred_section = find_section(lines, "preferred", JD_HEADINGS)
    preferred_lines = set(non_empty_lines(preferred_section or []))

    seen: set[str] = set()
    collected: list[JobRequirement] = []

    def add(requirement: JobRequirement) -> None:
        key = taxonomy.normalize_skill(requirement.skill)
        if key in seen:
            return
        seen.add(key)
        collected.append(requirement)

    for requirement in _section_requirements(required_section, "required"):
        add(requirement)
    for requirement in _section_requirements(preferred_section, "preferred"):
        add(requirement)

    for skill in taxonomy.jd_known_skills:
        flags = 0 if skill in taxonomy.case_sensitive_skills else re.IGNORECASE
        match = re.search(rf"(?<![\w+#.]){re.escape(skill)}(?![\w+#&])", raw_text, flags=flags)
        if match is None:
            continue
        add(
            JobRequirement(
                skill=skill,
                level=_known_skill_level(raw_text, match, preferred_lines),
                years=_skill_years(raw_text, skill),
            )
        )

    required = [item for item in collected if item.level == "required"]
    preferred = [item for item in collected if item.level != "required"]
    return required, preferred


def _section_lines(lines: list[str], kind: str) -> list[str]:
    section = find_section(lines, kind, JD_HEADINGS) or []
    cleaned = [strip_bullet_prefix(line) for line in non_empty_lines(section)]
    return [line for line in cleaned if 15 < len(line) < 500]


def parse_job_description(raw_text: str) -> ParsedJobDescription:
    """Structure plain job-posting text. Fields that cannot be found are left empty."""
    if not isinstance(raw_text, str):
        raise TypeError("raw_text must be a string")

    lines = raw_text.splitlines()
    required, preferred = extract_skill_requirements(raw_text, lines)
    jd = ParsedJobDescription(
        title=extract_title(raw_text),
        company=first_match(COMPANY_RULES, raw_text),
        location=first_match(LOCATION_RULES, raw_text),
        employment_type=first_match(EMPLOYMENT_TYPE_RULES, raw_text),
        required_skills=required,
        preferred_skills=preferred,
        responsibilities=_section_lines(lines, "responsibilities"),
        qualifications=_section_lines(lines, "requirements"),
        keywords=collect_keywords(raw_text, int(get_scoring_value("keywords.jd_keyword_limit", 50))),
        experience=first_match(EXPERIENCE_RULES, raw_text) or ExperienceRequirement(),
        salary=first_match(SALARY_RULES, raw_text),
        raw_text=raw_text,
    )
    logger.info(
        "jd_parsed id=%s title=%s required=%s preferred=%s",
        jd.id,
        jd.title,
        len(jd.required_skills),
        len(jd.preferred_skills),
    )
    return jd
