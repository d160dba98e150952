"""
Career and course scoring and ranking logic.
"""

from typing import List, Optional, Sequence
from schemas import Profile, Career, Course, ScoredCareer, ScoredCourse

SKILL_WEIGHT = 0.4
INTEREST_WEIGHT = 0.6
TOP_N = 3

def match_score(source: Optional[Sequence[str]], target: Optional[Sequence[str]]) -> float:
    """
    Score the overlap of two string lists.

    A source item matches when it is a case-insensitive substring of any
    target item. The count of matched source items is divided by the
    length of the LONGER list, so a short list fully matched against a
    longer one scores below 100.

    Args:
        source: Items the user has (skills, interests, required skills)
        target: Items to match against

    Returns:
        Score from 0-100
    """
    if not source or not target:
        return 0.0

    lowered_targets = [t.lower() for t in target]
    matched = [
        item for item in source
        if any(item.lower() in t for t in lowered_targets)
    ]

    return len(matched) / max(len(source), len(target)) * 100

def score_career(career: Career, profile: Profile) -> float:
    """Interests weigh 1.5x skills."""
    return (
        match_score(profile.skills, career.required_skills) * SKILL_WEIGHT
        + match_score(profile.interests, career.interests) * INTEREST_WEIGHT
    )

def rank_careers(careers: List[Career], profile: Profile) -> List[ScoredCareer]:
    """
    Rank careers for a profile.

    Sorts by score descending (ties keep catalog order), takes the top 3,
    then drops anything that did not score above zero.
    """
    scored = [
        ScoredCareer(**career.model_dump(), score=score_career(career, profile))
        for career in careers
    ]
    scored.sort(key=lambda c: c.score, reverse=True)

    return [c for c in scored[:TOP_N] if c.score > 0]

def required_skill_union(careers: List[Career]) -> List[str]:
    """Required skills across every career, deduplicated in first-seen order."""
    seen = []
    for career in careers:
        for skill in career.required_skills:
            if skill not in seen:
                seen.append(skill)
    return seen

def rank_courses(courses: List[Course], profile: Profile, careers: List[Career]) -> List[ScoredCourse]:
    """
    Rank courses by how many catalog-wide required skills they teach.

    The whole career catalog is used, not just the user's top matches.
    `profile` is accepted for symmetry with rank_careers.
    """
    needed = required_skill_union(careers)

    scored = [
        ScoredCourse(**course.model_dump(), score=match_score(needed, course.skills_gained))
        for course in courses
    ]
    positive = [c for c in scored if c.score > 0]
    positive.sort(key=lambda c: c.score, reverse=True)

    return positive[:TOP_N]
