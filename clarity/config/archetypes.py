"""
Archetype profiles used to build and ground the narrative panes.
"""

from dataclasses import dataclass

from clarity.config.constants import Archetype


@dataclass(frozen=True)
class ArchetypeProfile:
    """Recognition material for one archetype."""

    archetype: Archetype
    short_name: str
    recognition_signals: tuple[str, ...]
    typical_costs: tuple[str, ...]
    first_fixes: tuple[str, ...]

    def get_all_info_as_string(self) -> str:
        """Get the profile as a prompt-ready block."""
        signals = "\n".join(f"- {s}" for s in self.recognition_signals)
        costs = "\n".join(f"- {c}" for c in self.typical_costs)
        fixes = "\n".join(f"- {f}" for f in self.first_fixes)
        return (
            f"Recognition Signals:\n{signals}\n\n"
            f"Typical Costs:\n{costs}\n\n"
            f"First Fixes:\n{fixes}"
        )


ARCHETYPE_PROFILES: dict[Archetype, ArchetypeProfile] = {
    Archetype.REACTIVE_SOLO_OPERATOR: ArchetypeProfile(
        archetype=Archetype.REACTIVE_SOLO_OPERATOR,
        short_name="Solo & Reactive",
        recognition_signals=(
            "All decisions and calls go through you",
            "Working harder but revenue stays flat",
            "Can't take time off without business stopping",
        ),
        typical_costs=(
            "Revenue ceiling around what one person can do",
            "No time for growth activities (marketing, sales calls)",
            "Personal health and relationships suffer from overload",
        ),
        first_fixes=(
            "Start tracking where your time actually goes for one week",
            "Pick ONE repeating task and write down the steps (not automate yet)",
        ),
    ),
    Archetype.GROWING_WITHOUT_SYSTEMS: ArchetypeProfile(
        archetype=Archetype.GROWING_WITHOUT_SYSTEMS,
        short_name="Growing but Chaotic",
        recognition_signals=(
            "More work coming in but execution is inconsistent",
            "Relying on memory or scattered notes",
            "Same questions keep coming up from team and customers",
        ),
        typical_costs=(
            "Rework and mistakes eating 10-15% of job time",
            "Customer complaints about inconsistency",
            "Can't scale because every job is done differently",
        ),
        first_fixes=(
            "Document your top 3 most common jobs start-to-finish",
            "Create one simple checklist your team can follow",
        ),
    ),
    Archetype.TOOL_HEAVY_INSIGHT_LIGHT: ArchetypeProfile(
        archetype=Archetype.TOOL_HEAVY_INSIGHT_LIGHT,
        short_name="Lots of Tools, No Clarity",
        recognition_signals=(
            "Using software but not looking at reports",
            "Data exists but you don't trust it or use it",
            "Buying tools that don't talk to each other",
        ),
        typical_costs=(
            "Paying for software nobody uses fully",
            "Making decisions based on gut feel, not data",
            "Missing patterns in what's working and what isn't",
        ),
        first_fixes=(
            "Pick ONE number to track weekly (not 10, just one)",
            "Set up a 5-minute weekly review of that one number",
        ),
    ),
    Archetype.DELEGATION_WITHOUT_VISIBILITY: ArchetypeProfile(
        archetype=Archetype.DELEGATION_WITHOUT_VISIBILITY,
        short_name="Delegated but Blind",
        recognition_signals=(
            "Someone else handles key tasks but you don't see the data",
            "Finding out about problems too late",
            "Can't answer basic questions about the business without asking",
        ),
        typical_costs=(
            "Losing money without knowing where or why",
            "Customer issues escalating before you hear about them",
            "Can't make strategic decisions without digging for info",
        ),
        first_fixes=(
            "Set up a simple weekly view of the top 3 numbers",
            "Schedule a 15-minute weekly check-in with whoever runs operations",
        ),
    ),
    Archetype.MARKETING_LED_CHAOS: ArchetypeProfile(
        archetype=Archetype.MARKETING_LED_CHAOS,
        short_name="Marketing Works, Ops Don't",
        recognition_signals=(
            "Leads are coming in but you can't handle them all",
            "Missing calls, slow follow-up, inconsistent close rate",
            "Marketing spend going up but profit not following",
        ),
        typical_costs=(
            "Wasting 30-50% of leads due to response time",
            "Negative reviews from customers you couldn't service well",
            "High cost per customer with low lifetime value",
        ),
        first_fixes=(
            "Track how fast you get back to every new lead",
            "Pause one marketing channel and focus on converting what you have",
        ),
    ),
    Archetype.BUSY_PROFESSIONALIZED_BUT_BLIND: ArchetypeProfile(
        archetype=Archetype.BUSY_PROFESSIONALIZED_BUT_BLIND,
        short_name="Professional but No Insight",
        recognition_signals=(
            "Team in place, systems running, but no clear picture of health",
            "Don't know which services or customers are profitable",
            "Reacting to cash flow issues instead of planning ahead",
        ),
        typical_costs=(
            "Unprofitable services quietly subsidized by profitable ones",
            "Missing early warning signs of cash flow problems",
            "Can't confidently invest in growth because numbers are murky",
        ),
        first_fixes=(
            "Run a simple profitability check by service and customer type",
            "Set up a cash flow projection for the next 90 days",
        ),
    ),
    Archetype.INCONSISTENT_PROCESS_INCONSISTENT_CASH: ArchetypeProfile(
        archetype=Archetype.INCONSISTENT_PROCESS_INCONSISTENT_CASH,
        short_name="Feast or Famine",
        recognition_signals=(
            "Some months are great, some are scary",
            "No predictable pipeline or sales process",
            "Constantly hustling for the next job instead of building systems",
        ),
        typical_costs=(
            "Can't plan hiring or investments due to cash swings",
            "Personal stress from financial unpredictability",
            "Lower prices or desperation deals during slow months",
        ),
        first_fixes=(
            "Track where every job comes from for 30 days",
            "Build a simple pipeline view of opportunities in progress",
        ),
    ),
    Archetype.STABLE_BUT_STAGNANT: ArchetypeProfile(
        archetype=Archetype.STABLE_BUT_STAGNANT,
        short_name="Flat but Comfortable",
        recognition_signals=(
            "Revenue has been the same for 2+ years",
            "Comfortable but not excited about the business",
            "Not sure what the next move is",
        ),
        typical_costs=(
            "Opportunity cost of staying in neutral",
            "Inflation eating into real profit margins",
            "Business value not growing if you ever want to sell",
        ),
        first_fixes=(
            "List 3 things you would do differently if you had clarity",
            "Ask 3-5 recent customers what else they'd buy from you",
        ),
    ),
}


def get_profile(archetype: Archetype | str) -> ArchetypeProfile:
    """Get the profile for an archetype value."""
    return ARCHETYPE_PROFILES[Archetype(archetype)]
