"""
Text rendering for the career assistant.

Every generator returns a display-ready, markdown-flavoured string and
falls back to filler text instead of raising when profile fields are empty.
"""

import math
from typing import List
from schemas import Profile, Career, Course
from scoring import rank_careers, rank_courses

REFERENCE_SOFT_SKILLS = ["Communication", "Leadership", "Problem Solving", "Time Management"]

EMPTY_CAREERS_MESSAGE = (
    "Based on your profile, I recommend exploring different career paths. "
    "Take more assessments to get personalized recommendations."
)

EMPTY_COURSES_MESSAGE = (
    "I recommend exploring our course catalog. "
    "Courses can help develop skills for your desired career path."
)

CAPABILITIES_MESSAGE = (
    "I can help you with:\n\n"
    "• **Career Guidance** - Based on your skills and interests\n"
    "• **Course Recommendations** - Personalized learning paths\n"
    "• **Interview Preparation** - Tips and strategies\n"
    "• **Resume Review** - Optimization advice\n"
    "• **Skill Development** - Building your strengths\n\n"
    "What would you like help with?"
)

def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))

def generate_career_advice(careers: List[Career], profile: Profile) -> str:
    if not careers:
        return EMPTY_CAREERS_MESSAGE

    top_careers = rank_careers(careers, profile)

    if not top_careers:
        return (
            f"Based on your interests in {', '.join(profile.interests) or 'various fields'} "
            f"and skills in {', '.join(profile.skills) or 'multiple areas'}, "
            "I recommend exploring careers that align with these strengths. "
            "Consider developing additional technical skills to broaden your opportunities."
        )

    advice = "Based on your profile, here are the best career matches for you:\n\n"
    for index, career in enumerate(top_careers, start=1):
        advice += (
            f"{index}. **{career.title}** ({round_half_up(career.score)}% match)\n"
            f"   {career.description or 'A promising career path for you.'}\n\n"
        )

    advice += (
        f"You have strong interests in {' and '.join(profile.interests[:2])} "
        f"and good skills in {' and '.join(profile.skills[:2])}. "
        "These align well with these roles."
    )
    return advice

def generate_course_recommendations(courses: List[Course], profile: Profile, careers: List[Career]) -> str:
    if not courses:
        return EMPTY_COURSES_MESSAGE

    top_courses = rank_courses(courses, profile, careers)

    if not top_courses:
        return (
            f"Based on your education level ({profile.education.level or 'not specified'}), "
            "I recommend starting with foundational courses to build core competencies "
            "in your areas of interest."
        )

    recommendations = "Here are the top courses to help you advance your career:\n\n"
    for index, course in enumerate(top_courses, start=1):
        recommendations += (
            f"{index}. **{course.title}** ({course.level or 'Intermediate'} Level)\n"
            f"   {course.description or 'A valuable learning opportunity.'}\n"
            f"   Skills: {', '.join(course.skills_gained)}\n\n"
        )

    return recommendations

def interview_tips(profile: Profile) -> str:
    """
    Five interview tips from a fixed pool of eight.

    The pool order never changes, so the two generic opening tips always
    come first, followed by the skills, interests and question tips.
    """
    education = profile.education
    work_styles = ", ".join(profile.preferences.work_style[:2]) or "collaborative"

    tips = [
        "Research the company thoroughly before your interview. Know their mission, culture, and recent news.",
        "Practice the STAR method (Situation, Task, Action, Result) to answer behavioral questions effectively.",
        f"Highlight your skills in {' and '.join(profile.skills[:2])} - these are your strongest assets.",
        f"Be ready to discuss your interests in {' and '.join(profile.interests[:2])} and how they align with the role.",
        "Prepare 2-3 thoughtful questions for the interviewer to show genuine interest.",
        f"Given your {education.level} education in {education.field or 'your field'}, emphasize relevant coursework and projects.",
        f"Focus on your preferred work style ({work_styles}) and why it makes you effective.",
        "Practice speaking clearly and calmly. Use pauses to think before answering complex questions.",
    ]

    response = "Here are personalized interview tips for you:\n\n"
    for index, tip in enumerate(tips[:5], start=1):
        response += f"{index}. {tip}\n"

    return response

def resume_advice(profile: Profile) -> str:
    field = profile.education.field or "your field"

    sections = [
        f"**Highlight Key Skills**: Feature these prominently: "
        f"{', '.join(profile.skills) or 'Your technical and soft skills'}",
        f"**Lead with Relevant Education**: Emphasize your {profile.education.level} in {field}",
        "**Match Job Descriptions**: Tailor your resume for each application, "
        "using keywords from the job posting that match your skills.",
        "**Show Impact**: Use quantifiable results and metrics in your accomplishments, "
        f"especially related to your interests in {' and '.join(profile.interests[:2])}.",
        "**Professional Summary**: Create a 2-3 line summary highlighting your strengths in your target area.",
        "**Format & Length**: Keep to one page if early career, "
        f"two if you have significant experience in {field}.",
    ]

    body = "\n\n".join(f"{index}. {section}" for index, section in enumerate(sections, start=1))
    return "Here's how to tailor your resume for maximum impact:\n\n" + body

def missing_soft_skills(profile: Profile) -> List[str]:
    """Reference soft skills absent from the profile (exact, case-sensitive)."""
    return [skill for skill in REFERENCE_SOFT_SKILLS if skill not in profile.skills]

def skill_development_plan(profile: Profile, courses: List[Course]) -> str:
    focus_skills = missing_soft_skills(profile)[:2]

    response = "Here's your personalized skill development plan:\n\n"
    response += f"**Your Current Strengths**: {', '.join(profile.skills[:3]) or 'Various technical skills'}\n\n"

    if focus_skills:
        response += f"**Skills to Develop**: {', '.join(focus_skills)}\n\n"

        relevant_courses = [
            course for course in courses
            if any(
                skill.lower() in gained.lower()
                for skill in focus_skills
                for gained in course.skills_gained
            )
        ][:2]

        if relevant_courses:
            response += "**Recommended Courses**:\n"
            for course in relevant_courses:
                response += f"- {course.title}: Helps develop {', '.join(course.skills_gained)}\n"
            response += "\n"

    first_interest = profile.interests[0] if profile.interests else "your field"
    response += (
        "**Action Plan**:\n"
        "1. Complete 1-2 online courses in your weak areas\n"
        "2. Seek hands-on projects to apply these skills\n"
        f"3. Join professional groups related to your interests in {first_interest}\n"
        "4. Request mentorship opportunities to accelerate growth"
    )

    return response
