"""
Keyword injection for the Targeting context.

Takes a parsed ResumeDocument and normalized Keywords and returns a new
document with keyword phrases worked in, plus statistics. The input document
is never modified; all edits happen on a deep copy.

Phases:
A. Skills: up to max_high_prio_skills high-priority keywords are appended to
   the hard-skill list unless already present (case-insensitive).
B. Experience: a candidate pool of the first high- and medium-priority
   experience keywords is rotated across bullets in document order, one
   keyword per bullet, each keyword used at most once, until the global
   injection cap is hit. After the first role, leftover high-priority
   keywords may be combined into a synthetic bullet.
C. Location: an explicit override replaces personal.location.

The used set belongs to the experience phase: a keyword added to the skills
list can still be merged into a bullet, but no keyword reaches more than one
bullet. It is keyed case-insensitively so "docker" and "Docker" count as one
keyword. keywords_covered lists each keyword once.

Randomness (metric phrase choice) comes from an injectable random.Random so
tests can seed it.
"""

import random
import time
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Set

from cvinject.contexts.intake.keywords import Keyword, Priority, Target
from cvinject.contexts.targeting.config import DEFAULT_CONFIG, InjectionConfig
from cvinject.contexts.targeting.logger import _log_debug, log_injection_result
from cvinject.contexts.templating.resume_data_structure import ExperienceEntry, ResumeDocument


@dataclass
class InjectionStats:
    """
    Bookkeeping for one injection run.

    Attributes:
        skills_added: Keywords appended to the hard-skill list
        bullets_modified: Existing bullets that received a phrase
        new_bullets_created: Synthetic bullets appended
        total_injections: Injections counted against the cap (a synthetic
            bullet counts once per keyword it carries)
        keywords_covered: Keywords placed, in placement order
        timing_ms: Wall time of the run, observational only
    """

    skills_added: int = 0
    bullets_modified: int = 0
    new_bullets_created: int = 0
    total_injections: int = 0
    keywords_covered: List[str] = field(default_factory=list)
    timing_ms: float = 0.0


@dataclass
class InjectionResult:
    """Injected document and the stats describing how it was produced."""

    document: ResumeDocument
    stats: InjectionStats


def merge_phrase_into_bullet(bullet: str, phrase: str) -> str:
    """
    Attach an injected phrase to a bullet.

    A bullet ending in a period gets the phrase spliced in before the period,
    lower-cased and joined by a comma. Otherwise the phrase is appended after
    a space as-is.

    Example:
        >>> merge_phrase_into_bullet("Built systems.", "Applied Go in sprints.")
        'Built systems, applied go in sprints.'
        >>> merge_phrase_into_bullet("Built systems", "Applied Go in sprints.")
        'Built systems Applied Go in sprints.'
    """
    if bullet.endswith("."):
        spliced = phrase.lower()
        if spliced.endswith("."):
            spliced = spliced[:-1]
        return f"{bullet[:-1]}, {spliced}."
    return f"{bullet} {phrase}"


class KeywordInjector:
    """
    Stateful helper for a single injection run.

    Holds the run-wide state shared across roles: the used-keyword set, the
    template rotation index and the stats counters. Create one per run.
    """

    def __init__(
        self,
        keywords: Sequence[Keyword],
        config: InjectionConfig = DEFAULT_CONFIG,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self.rng = rng if rng is not None else random.Random()
        self.stats = InjectionStats()
        self.used: Set[str] = set()
        self.template_index = 0

        self.high = [k for k in keywords if k.priority is Priority.HIGH]
        self.medium = [k for k in keywords if k.priority is Priority.MEDIUM]
        self.experience_pool = [
            k
            for k in (
                self.high[: config.high_experience_pool_size]
                + self.medium[: config.medium_experience_pool_size]
            )
            if k.targets_section(Target.EXPERIENCE)
        ]

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _is_used(self, keyword: Keyword) -> bool:
        return keyword.text.casefold() in self.used

    def _record_covered(self, keyword: Keyword) -> None:
        key = keyword.text.casefold()
        if all(covered.casefold() != key for covered in self.stats.keywords_covered):
            self.stats.keywords_covered.append(keyword.text)

    def _mark_used(self, keyword: Keyword) -> None:
        self.used.add(keyword.text.casefold())
        self._record_covered(keyword)

    def _pick_metric(self) -> str:
        return self.rng.choice(self.config.metric_phrases)

    def _next_template(self) -> str:
        templates = self.config.injection_templates
        if not self.config.rotation_enabled:
            return templates[0]
        template = templates[self.template_index % len(templates)]
        self.template_index += 1
        return template

    def _cap_reached(self) -> bool:
        return self.stats.total_injections >= self.config.max_total_injections

    # -------------------------------------------------------------------------
    # Phase A: skills
    # -------------------------------------------------------------------------

    def inject_skills(self, document: ResumeDocument) -> None:
        candidates = [k for k in self.high if k.targets_section(Target.SKILLS)]
        for keyword in candidates[: self.config.max_high_prio_skills]:
            if document.skills.add_hard_skill(keyword.text):
                self.stats.skills_added += 1
                self._record_covered(keyword)
            else:
                _log_debug(f"Skill already present: '{keyword.text}'")
        document.skills.normalize()

    # -------------------------------------------------------------------------
    # Phase B: experience
    # -------------------------------------------------------------------------

    def _choose_keyword(self, bullet: str) -> Optional[Keyword]:
        bullet_key = bullet.casefold()
        for keyword in self.experience_pool:
            if not self._is_used(keyword) and keyword.text.casefold() not in bullet_key:
                return keyword
        return None

    def _inject_bullet(self, bullet: str) -> str:
        if self._cap_reached():
            return bullet

        keyword = self._choose_keyword(bullet)
        if keyword is None:
            return bullet

        phrase = self._next_template().replace("{kw}", keyword.text)
        phrase = phrase.replace("{metric}", self._pick_metric())

        self._mark_used(keyword)
        self.stats.bullets_modified += 1
        self.stats.total_injections += 1

        return merge_phrase_into_bullet(bullet, phrase)

    def _remaining_high_experience(self) -> List[Keyword]:
        remaining, seen = [], set()
        for keyword in self.high:
            key = keyword.text.casefold()
            if not keyword.targets_section(Target.EXPERIENCE):
                continue
            if key not in self.used and key not in seen:
                seen.add(key)
                remaining.append(keyword)
        return remaining

    def _maybe_synthesize_bullet(self, entry: ExperienceEntry, entry_index: int) -> None:
        if self.config.synthesize_bullets_for_first_entry_only and entry_index != 0:
            return
        if self.stats.new_bullets_created >= self.config.max_synthetic_bullets:
            return

        per_bullet = self.config.keywords_per_synthetic_bullet
        if per_bullet < 1:
            return
        if self.stats.total_injections + per_bullet > self.config.max_total_injections:
            return

        remaining = self._remaining_high_experience()
        if len(remaining) < per_bullet:
            return

        chosen = remaining[:per_bullet]
        bullet = self.config.synthetic_bullet_template.format(
            keywords=" and ".join(k.text for k in chosen),
            metric=self._pick_metric(),
        )
        entry.bullets.append(bullet)

        for keyword in chosen:
            self._mark_used(keyword)
        self.stats.new_bullets_created += 1
        self.stats.total_injections += len(chosen)
        _log_debug(f"Synthetic bullet for '{entry.company}': {bullet}")

    def inject_experience(self, document: ResumeDocument) -> None:
        for index, entry in enumerate(document.experience):
            entry.bullets = [self._inject_bullet(bullet) for bullet in entry.bullets]
            self._maybe_synthesize_bullet(entry, index)


def inject_keywords(
    document: ResumeDocument,
    keywords: Iterable[Keyword],
    config: InjectionConfig = DEFAULT_CONFIG,
    location_override: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> InjectionResult:
    """
    Inject keywords into a copy of a resume document.

    Args:
        document: Parsed resume; left unmodified
        keywords: Normalized keywords, in priority order
        config: Injection limits and phrasing
        location_override: If given (non-empty), replaces personal.location
        rng: Random source for metric phrases (unseeded by default)

    Returns:
        InjectionResult with the new document and stats

    Example:
        >>> result = inject_keywords(doc, normalize_keywords({"highROI": ["Docker"]}))
        >>> result.stats.skills_added
        1
    """
    start = time.perf_counter()

    injected = document.clone()
    injector = KeywordInjector(list(keywords), config=config, rng=rng)

    injector.inject_skills(injected)
    injector.inject_experience(injected)

    if location_override:
        injected.personal.location = location_override

    stats = injector.stats
    stats.timing_ms = (time.perf_counter() - start) * 1000
    log_injection_result(stats)

    return InjectionResult(document=injected, stats=stats)
