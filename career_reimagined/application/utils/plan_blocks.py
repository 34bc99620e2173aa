from __future__ import annotations

from career_reimagined.application.ports.document import BlockEntry, ContentBlock
from career_reimagined.domain.entities.career_plan import CareerPlan, PlanWeek

SKILLS_BLOCK_ID = "print-skills"
RESOURCES_BLOCK_ID = "print-resources"
LEADERS_BLOCK_ID = "print-network-leaders"
COMPANIES_BLOCK_ID = "print-network-companies"


def week_block_id(week_number: int) -> str:
    return f"print-week-{week_number}"


def profile_blocks(plan: CareerPlan) -> list[ContentBlock]:
    """Skills, resources, leaders, companies, in export order."""
    return [
        ContentBlock(
            block_id=SKILLS_BLOCK_ID,
            heading="Key Skills",
            entries=tuple(BlockEntry(s, "bullet") for s in plan.skills_to_develop),
        ),
        ContentBlock(
            block_id=RESOURCES_BLOCK_ID,
            heading="Learn From",
            entries=tuple(
                entry
                for course in plan.recommended_courses
                for entry in (BlockEntry(course.title, "strong"), BlockEntry(course.href, "muted"))
            ),
        ),
        ContentBlock(
            block_id=LEADERS_BLOCK_ID,
            heading="Network & Thought Leaders",
            entries=tuple(BlockEntry(leader.title, "bullet") for leader in plan.thought_leaders),
        ),
        ContentBlock(
            block_id=COMPANIES_BLOCK_ID,
            heading="Target Companies",
            entries=tuple(BlockEntry(company.title, "bullet") for company in plan.target_companies),
        ),
    ]


def week_block(week: PlanWeek) -> ContentBlock:
    entries = [BlockEntry("KEY GOALS", "label")]
    entries += [BlockEntry(g, "bullet") for g in week.goals]
    entries.append(BlockEntry("ACTION ITEMS", "label"))
    entries += [BlockEntry(a, "bullet") for a in week.action_items]
    return ContentBlock(
        block_id=week_block_id(week.week_number),
        heading=week.theme,
        entries=tuple(entries),
        badge=f"Week {week.week_number}",
    )


def roadmap_blocks(plan: CareerPlan) -> list[ContentBlock]:
    return [week_block(w) for w in plan.weeks]
