from __future__ import annotations

import logging
import re

from resume_analyzer.schemas import (
    Certification,
    ContactInfo,
    Education,
    ParsedResume,
    Project,
    WorkExperience,
)
from resume_analyzer.taxonomy import get_default_taxonomy_provider

from .rules import ExtractionRule, first_match, regex_rule
from .utils import (
    LOCATION_PATTERN,
    TITLE_KEYWORD_RE,
    build_heading_index,
    find_section,
    heading_kind,
    is_bullet_like,
    non_empty_lines,
    normalize_line,
    split_blocks,
    starts_with_action,
    strip_bullet_prefix,
)

logger = logging.getLogger(__name__)

RESUME_HEADINGS = build_heading_index(
    {
        "summary": (
            "summary",
            "professional summary",
            "career summary",
            "executive summary",
            "objective",
            "career objective",
            "profile",
            "professional profile",
            "about me",
            "about",
            "overview",
        ),
        "skills": (
            "skills",
            "technical skills",
            "core skills",
            "key skills",
            "skills & tools",
            "skills and tools",
            "skills & technologies",
            "skills and technologies",
            "core competencies",
            "competencies",
            "technologies",
            "tech stack",
            "tools",
            "areas of expertise",
            "expertise",
        ),
        "experience": (
            "experience",
            "work experience",
            "professional experience",
            "relevant experience",
            "employment",
            "employment history",
            "work history",
            "career history",
        ),
        "education": (
            "education",
            "academic background",
            "education & training",
            "education and training",
            "academic qualifications",
        ),
        "projects": (
            "projects",
            "personal projects",
            "key projects",
            "side projects",
            "selected projects",
            "academic projects",
        ),
        "certifications": (
            "certifications",
            "certification",
            "certificates",
            "licenses & certifications",
            "licenses and certifications",
            "courses & certifications",
        ),
        "languages": ("languages", "spoken languages", "language skills"),
        "other": (
            "awards",
            "honors",
            "honors & awards",
            "achievements",
            "publications",
            "interests",
            "hobbies",
            "references",
            "volunteer",
            "volunteering",
            "volunteer experience",
            "activities",
            "extracurricular activities",
            "leadership",
        ),
    }
)

_NON_NAME_WORDS = {"resume", "résumé", "curriculum vitae", "cv", "contact", "contact information", "personal information"}

_EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)*\.[A-Za-z]{2,}")
_PHONE_RE = re.compile(r"(?<!\d)(?:\+\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}\b")
_LOCATION_RE = re.compile(rf"^(?:.*?[|•·]\s*)?({LOCATION_PATTERN})\b", re.MULTILINE)
_TRAILING_LOCATION_RE = re.compile(rf",?\s*({LOCATION_PATTERN})$")

_MONTH = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\.?"
)
_DATE = rf"(?:{_MONTH}\s+|\d{{1,2}}/)?(?:19|20)\d{{2}}"
DATE_RANGE_RE = re.compile(
    rf"(?P<start>{_DATE})\s*(?:-|–|—|to|until)\s*(?P<end>{_DATE}|present|current|now|today)\b",
    re.IGNORECASE,
)
SINGLE_DATE_RE = re.compile(rf"(?<![\d/]){_DATE}(?!\d)", re.IGNORECASE)
_PRESENT_RE = re.compile(r"\b(?:present|current|now|today)\b", re.IGNORECASE)
_YEAR_RE = re.compile(r"(?<!\d)(?:19|20)\d{2}(?!\d)")

_HEADER_SPLIT_RE = re.compile(r"\s*\|\s*|\s+at\s+|\s+@\s+|\s+[–—-]\s+|\s*•\s*")
_INSTITUTION_RE = re.compile(r"\b(?:university|college|institute|school|academy|polytechnic)\b", re.IGNORECASE)
_DEGREE_RE = re.compile(
    r"(?i:\b(?:bachelor|master|associate)(?:'s|s)?(?:\s+(?:of|in)\s+(?:science|arts|engineering|business administration|fine arts|technology|applied science))?"
    r"|\bdoctor(?:ate)?\b(?:\s+of\s+philosophy)?|\bdiploma\b|\bph\.?d\b\.?)"
    r"|\b(?:B\.S\.|B\.A\.|M\.S\.|M\.A\.|B\.Sc\.?|M\.Sc\.?|BSc|MSc|BS|MS|BEng|MEng|BTech|MTech|BBA|MBA|PhD)(?![A-Za-z])"
)
_GPA_RE = re.compile(r"GPA[:\s]*([0-9.]+)", re.IGNORECASE)

_TECH_LINE_RE = re.compile(
    r"\b(?:technologies|tech stack|stack|built with|using|tools)\b\s*[:\-]?\s*([^.\n]+)",
    re.IGNORECASE,
)
_TECH_SPLIT_RE = re.compile(r"\s*(?:,|\||;|\band\b)\s*", re.IGNORECASE)
_GITHUB_LINK_RE = re.compile(r"(?:https?://)?(?:www\.)?github\.com/[\w./-]+", re.IGNORECASE)
_URL_RE = re.compile(r"https?://[^\s)>,]+", re.IGNORECASE)
_NAME_SPLIT_RE = re.compile(r"\s+[-–—|]\s+|:\s+")

_SKILL_DELIMITERS_RE = re.compile(r"[,|;()\t•◦▪▫●○■□◆◇▶►‣·]")
_SKILL_LABEL_RE = re.compile(r"^[A-Za-z][A-Za-z &/-]{1,30}:\s*")
_SKILL_FILLERS = {"and", "or", "etc", "etc.", "including", "others"}

_LANGUAGE_LEVEL_RE = re.compile(r"\(.*?\)|\s*[-–:]\s+.*$")


def _handle_rule(name: str, pattern: str, prefix: str) -> ExtractionRule[str]:
    return regex_rule(
        name,
        re.compile(pattern, re.IGNORECASE),
        lambda match: f"{prefix}{match.group(1)}" if match.group(1) else None,
    )


_LINKEDIN_RULES = (
    _handle_rule("linkedin_profile_url", r"linkedin\.com/in/([A-Za-z0-9_-]+)", "linkedin.com/in/"),
    _handle_rule("linkedin_label", r"linkedin\s*:\s*(?:@|/in/)?([A-Za-z0-9_-]{3,})\b", "linkedin.com/in/"),
)
_GITHUB_RULES = (
    _handle_rule("github_profile_url", r"github\.com/([A-Za-z0-9_-]+)", "github.com/"),
    _handle_rule("github_label", r"github\s*:\s*@?([A-Za-z0-9_-]{2,})\b", "github.com/"),
)
_PORTFOLIO_RULES = (
    regex_rule("portfolio_label", r"(?:portfolio|website|web)\s*:\s*(https?://\S+)", flags=re.IGNORECASE),
)


def _issuer_rule(name: str, pattern: str) -> ExtractionRule[re.Match[str]]:
    compiled = re.compile(pattern, re.IGNORECASE)
    return regex_rule(name, compiled, lambda match: match if normalize_line(match.group(1)) else None)


_ISSUER_RULES = (
    _issuer_rule("issuer_parenthesized", r"\(([^()]+)\)"),
    _issuer_rule("issuer_by", r"\s+by\s+(.+)$"),
    _issuer_rule("issuer_dash", r"\s+[-–—|]\s+(.+)$"),
)


def _header_block(lines: list[str]) -> list[str]:
    block: list[str] = []
    for line in lines:
        if heading_kind(line, RESUME_HEADINGS) is not None:
            break
        if line.strip():
            block.append(normalize_line(line))
        if len(block) >= 10:
            break
    return block


def _extract_name(lines: list[str]) -> str:
    for line in non_empty_lines(lines)[:5]:
        candidate = line.split("|")[0].strip()
        if not 3 <= len(candidate) < 60:
            continue
        lowered = candidate.lower()
        if "@" in candidate or "http" in lowered or candidate[0].isdigit():
            continue
        if lowered in _NON_NAME_WORDS or heading_kind(candidate, RESUME_HEADINGS) is not None:
            continue
        if _PHONE_RE.search(candidate):
            continue
        return candidate
    return ""


def extract_contact(raw_text: str, lines: list[str]) -> ContactInfo:
    email = _EMAIL_RE.search(raw_text)
    phone = _PHONE_RE.search(raw_text)
    header = "\n".join(_header_block(lines))
    location = _LOCATION_RE.search(header)
    return ContactInfo(
        name=_extract_name(lines),
        email=email.group(0) if email else "",
        phone=phone.group(0).strip() if phone else "",
        location=normalize_line(location.group(1)) if location else None,
        linkedin=first_match(_LINKEDIN_RULES, raw_text),
        github=first_match(_GITHUB_RULES, raw_text),
        portfolio=first_match(_PORTFOLIO_RULES, raw_text),
    )


def extract_summary(lines: list[str]) -> str | None:
    section = find_section(lines, "summary", RESUME_HEADINGS, allow_inline=True)
    if not section:
        return None
    text = " ".join(strip_bullet_prefix(line) for line in non_empty_lines(section))
    if 50 <= len(text) <= 2000:
        return text
    return None


def _clean_skill_token(token: str) -> str:
    cleaned = normalize_line(token).strip(" .:-*")
    cleaned = re.sub(r"^(?:and|or)\s+", "", cleaned, flags=re.IGNORECASE)
    return cleaned


def _section_skills(lines: list[str]) -> list[str]:
    section = find_section(lines, "skills", RESUME_HEADINGS, allow_inline=True)
    if not section:
        return []
    skills: list[str] = []
    for line in non_empty_lines(section):
        content = _SKILL_LABEL_RE.sub("", strip_bullet_prefix(line), count=1)
        for token in _SKILL_DELIMITERS_RE.sub(",", content).split(","):
            cleaned = _clean_skill_token(token)
            if not 2 <= len(cleaned) <= 50:
                continue
            if cleaned.lower() in _SKILL_FILLERS or cleaned[0].isdigit():
                continue
            skills.append(cleaned)
    return skills


def _known_skill_pattern(skill: str, case_sensitive: bool) -> re.Pattern[str]:
    flags = 0 if case_sensitive else re.IGNORECASE
    return re.compile(rf"(?<![\w+#.]){re.escape(skill)}(?![\w+#&])", flags)


def scan_known_skills(text: str, skills: tuple[str, ...]) -> list[str]:
    taxonomy = get_default_taxonomy_provider()
    return [
        skill
        for skill in skills
        if _known_skill_pattern(skill, skill in taxonomy.case_sensitive_skills).search(text)
    ]


def extract_skills(raw_text: str, lines: list[str]) -> list[str]:
    taxonomy = get_default_taxonomy_provider()
    seen: set[str] = set()
    skills: list[str] = []
    for skill in _section_skills(lines) + scan_known_skills(raw_text, taxonomy.resume_known_skills):
        key = taxonomy.normalize_skill(skill)
        if key in seen:
            continue
        seen.add(key)
        skills.append(skill)
    return skills


def _has_date_range(lines: list[str]) -> bool:
    return any(DATE_RANGE_RE.search(line) for line in lines)


def _has_date(lines: list[str]) -> bool:
    return any(SINGLE_DATE_RE.search(line) for line in lines)


def _is_short_header(line: str) -> bool:
    return (
        not is_bullet_like(line)
        and len(line) <= 60
        and len(line.split()) <= 8
        and not line.endswith(".")
        and not DATE_RANGE_RE.search(line)
    )


def segment_experience(section: list[str]) -> list[list[str]]:
    entries: list[list[str]] = []
    current: list[str] = []
    saw_blank = False

    def flush() -> None:
        nonlocal current
        if current:
            entries.append(current)
        current = []

    for raw_line in section:
        line = normalize_line(raw_line)
        if not line:
            saw_blank = True
            continue
        bullet = is_bullet_like(line)
        if current:
            has_bullets = any(is_bullet_like(item) for item in current)
            if saw_blank and (has_bullets or _has_date(current)):
                flush()
            elif not bullet and has_bullets:
                if line[0].islower():
                    current[-1] = f"{current[-1]} {line}"
                    saw_blank = False
                    continue
                flush()
            elif not bullet and DATE_RANGE_RE.search(line) and _has_date_range(current):
                carried: list[str] = []
                while current and len(carried) < 2 and _is_short_header(current[-1]) and len(current) > 1:
                    carried.insert(0, current.pop())
                flush()
                current = carried
        current.append(line)
        saw_blank = False
    flush()
    return entries


def _strip_dates(text: str) -> str:
    text = DATE_RANGE_RE.sub(" ", text)
    text = SINGLE_DATE_RE.sub(" ", text)
    text = re.sub(r"\(\s*[-–,]?\s*\)", " ", text)
    return normalize_line(text).strip(" ,|-–—")


def _split_dates(text: str) -> tuple[str, str]:
    date_range = DATE_RANGE_RE.search(text)
    if date_range:
        return normalize_line(date_range.group("start")), normalize_line(date_range.group("end"))
    single = SINGLE_DATE_RE.search(text)
    if single:
        return normalize_line(single.group(0)), ""
    return "", ""


def _parse_experience_entry(entry: list[str]) -> WorkExperience | None:
    header: list[str] = []
    description: list[str] = []
    for line in entry:
        if is_bullet_like(line):
            description.append(strip_bullet_prefix(line))
        elif not description and len(header) < 3:
            header.append(line)
        elif _strip_dates(line):
            description.append(line)

    start_date, end_date = _split_dates(" | ".join(header))
    company = ""
    position = ""
    location: str | None = None
    for line in header:
        for part in _HEADER_SPLIT_RE.split(_strip_dates(line)):
            part = part.strip(" ,|()")
            if not part:
                continue
            trailing = _TRAILING_LOCATION_RE.search(part)
            if trailing:
                location = location or normalize_line(trailing.group(1))
                part = part[: trailing.start()].strip(" ,")
                if not part:
                    continue
            if part.lower() == "remote":
                location = location or "Remote"
                continue
            if TITLE_KEYWORD_RE.search(part):
                position = position or part
                continue
            if company or len(part) > 60 or len(part.split()) > 8 or starts_with_action(part):
                continue
            company = part

    if not company and not position:
        return None
    return WorkExperience(
        company=company,
        position=position,
        location=location,
        start_date=start_date,
        end_date=end_date,
        current=bool(end_date and _PRESENT_RE.fullmatch(end_date)),
        description=description,
    )


def extract_experience(lines: list[str]) -> list[WorkExperience]:
    section = find_section(lines, "experience", RESUME_HEADINGS)
    if not section:
        return []
    entries = [_parse_experience_entry(entry) for entry in segment_experience(section)]
    return [entry for entry in entries if entry is not None]


def _segment_education(section: list[str]) -> list[list[str]]:
    entries: list[list[str]] = []
    for block in split_blocks(section):
        current: list[str] = []
        seen_institution = False
        seen_degree = False
        for raw_line in block:
            line = strip_bullet_prefix(raw_line)
            is_institution = bool(_INSTITUTION_RE.search(line))
            is_degree = bool(_DEGREE_RE.search(line))
            if current and ((is_institution and seen_institution) or (is_degree and seen_degree)):
                entries.append(current)
                current = []
                seen_institution = seen_degree = False
            current.append(line)
            seen_institution = seen_institution or is_institution
            seen_degree = seen_degree or is_degree
        if current:
            entries.append(current)
    return entries


def _field_of_study(line: str, degree_match: re.Match[str]) -> str:
    remainder = _strip_dates(_GPA_RE.sub(" ", line[degree_match.end():]))
    remainder = re.sub(r"^[\s.,:\-–—]*(?:(?:in|of)\s+)?", "", remainder, flags=re.IGNORECASE)
    field = re.split(r"\s*(?:,|\||\(|\s[-–—]\s)\s*", remainder, maxsplit=1)[0].strip(" .")
    if not field or _INSTITUTION_RE.search(field):
        return ""
    return field


def _parse_education_entry(entry: list[str]) -> Education | None:
    institution = ""
    degree = ""
    field = ""
    for line in entry:
        degree_match = _DEGREE_RE.search(line)
        if degree_match and not degree:
            degree = normalize_line(degree_match.group(0)).rstrip(",")
            field = _field_of_study(line, degree_match)
        if not institution:
            for part in re.split(r"\s*(?:,|\|)\s*|\s+[-–—]\s+", _strip_dates(line)):
                if _INSTITUTION_RE.search(part):
                    institution = part.strip(" .")
                    break
    if not institution:
        for line in entry:
            candidate = _strip_dates(_GPA_RE.sub(" ", line))
            if candidate and not _DEGREE_RE.search(candidate):
                institution = candidate
                break
    if not institution and not degree:
        return None

    text = " | ".join(entry)
    start_date, end_date = "", ""
    date_range = DATE_RANGE_RE.search(text)
    if date_range:
        start_date, end_date = normalize_line(date_range.group("start")), normalize_line(date_range.group("end"))
    else:
        years = _YEAR_RE.findall(text)
        if len(years) >= 2:
            start_date, end_date = years[0], years[-1]
        elif years:
            end_date = years[0]
    gpa = _GPA_RE.search(text)
    return Education(
        institution=institution,
        degree=degree,
        field=field,
        start_date=start_date,
        end_date=end_date,
        gpa=gpa.group(1).rstrip(".") if gpa else None,
    )


def extract_education(lines: list[str]) -> list[Education]:
    section = find_section(lines, "education", RESUME_HEADINGS)
    if not section:
        return []
    entries = [_parse_education_entry(entry) for entry in _segment_education(section)]
    return [entry for entry in entries if entry is not None]


def _split_technologies(text: str) -> list[str]:
    values: list[str] = []
    for token in _TECH_SPLIT_RE.split(text):
        cleaned = token.strip(" .:-()")
        if 1 <= len(cleaned) <= 40 and cleaned not in values:
            values.append(cleaned)
    return values


def _build_project(name_line: str, body: list[str]) -> Project | None:
    parts = _NAME_SPLIT_RE.split(name_line, maxsplit=1)
    name = parts[0].strip(" :")
    lines = ([parts[1]] if len(parts) > 1 else []) + body
    if not name:
        return None
    text = "\n".join([name_line, *body])

    technologies: list[str] = []
    description: list[str] = []
    for line in lines:
        tech = _TECH_LINE_RE.search(line)
        if tech and not technologies:
            technologies = _split_technologies(tech.group(1))
            if tech.start() == 0:
                continue
        if len(line) > 10 and not _URL_RE.fullmatch(line):
            description.append(line)
    if not technologies:
        taxonomy = get_default_taxonomy_provider()
        technologies = scan_known_skills(text, taxonomy.resume_known_skills)

    github = _GITHUB_LINK_RE.search(text)
    github_link = github.group(0).rstrip("./") if github else None
    url = next(
        (match.group(0).rstrip("./") for match in _URL_RE.finditer(text) if not _GITHUB_LINK_RE.search(match.group(0))),
        None,
    )
    return Project(
        name=name,
        description=" ".join(description),
        technologies=technologies,
        url=url,
        github=github_link,
    )


def extract_projects(lines: list[str]) -> list[Project]:
    section = find_section(lines, "projects", RESUME_HEADINGS)
    if not section:
        return []
    cleaned = non_empty_lines(section)
    projects: list[Project | None] = []
    if all(is_bullet_like(line) for line in cleaned):
        projects = [_build_project(strip_bullet_prefix(line), []) for line in cleaned]
    else:
        name_line: str | None = None
        body: list[str] = []
        for line in cleaned:
            if is_bullet_like(line):
                body.append(strip_bullet_prefix(line))
                continue
            starts_project = name_line is None or bool(body) or _is_short_header(line)
            if starts_project and not _TECH_LINE_RE.match(line):
                if name_line is not None:
                    projects.append(_build_project(name_line, body))
                name_line, body = line, []
            else:
                body.append(line)
        if name_line is not None:
            projects.append(_build_project(name_line, body))
    return [project for project in projects if project is not None]


def _parse_certification(line: str) -> Certification | None:
    date_range = DATE_RANGE_RE.search(line)
    single = SINGLE_DATE_RE.search(line)
    date = normalize_line(date_range.group(0) if date_range else single.group(0) if single else "")
    remainder = _strip_dates(line)
    remainder = re.sub(r"\b(?:issued|expires|earned)\b:?", " ", remainder, flags=re.IGNORECASE)
    remainder = normalize_line(re.sub(r"\s*,\s*\)", ")", remainder)).strip(" ,|-–—")
    issuer = ""
    name = remainder
    issuer_match = first_match(_ISSUER_RULES, remainder)
    if issuer_match is not None:
        issuer = normalize_line(issuer_match.group(1)).strip(" ,")
        name = normalize_line(remainder[: issuer_match.start()] + remainder[issuer_match.end():]).strip(" ,|-–—")
    if not name:
        return None
    return Certification(name=name, issuer=issuer, date=date)


def extract_certifications(lines: list[str]) -> list[Certification]:
    section = find_section(lines, "certifications", RESUME_HEADINGS)
    if not section:
        return []
    parsed = [_parse_certification(strip_bullet_prefix(line)) for line in non_empty_lines(section)]
    return [item for item in parsed if item is not None]


def extract_languages(lines: list[str]) -> list[str] | None:
    section = find_section(lines, "languages", RESUME_HEADINGS, allow_inline=True)
    if not section:
        return None
    taxonomy = get_default_taxonomy_provider()
    known = {skill.lower() for skill in taxonomy.resume_known_skills}
    languages: list[str] = []
    for line in non_empty_lines(section):
        for token in re.split(r"[,|;•·]", strip_bullet_prefix(line)):
            cleaned = normalize_line(_LANGUAGE_LEVEL_RE.sub("", token)).strip(" .:")
            if not 2 <= len(cleaned) < 30:
                continue
            if taxonomy.is_tech_term(cleaned) or cleaned.lower() in known:
                continue
            if cleaned not in languages:
                languages.append(cleaned)
    return languages or None


def parse_resume(raw_text: str, file_name: str = "", file_type: str = "pdf") -> ParsedResume:
    """Structure plain résumé text. Fields that cannot be found are left empty."""
    if not isinstance(raw_text, str):
        raise TypeError("raw_text must be a string")
    if not isinstance(file_name, str):
        raise TypeError("file_name must be a string")

    lines = raw_text.splitlines()
    resume = ParsedResume(
        contact=extract_contact(raw_text, lines),
        summary=extract_summary(lines),
        skills=extract_skills(raw_text, lines),
        experience=extract_experience(lines),
        education=extract_education(lines),
        projects=extract_projects(lines),
        certifications=extract_certifications(lines),
        languages=extract_languages(lines),
        raw_text=raw_text,
        file_name=file_name,
        file_type=file_type,
    )
    logger.info(
        "resume_parsed id=%s skills=%s experience=%s education=%s",
        resume.id,
        len(resume.skills),
        len(resume.experience),
        len(resume.education),
    )
    return resume
