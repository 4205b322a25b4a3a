"""Static copy for the marketing pages."""

from src.buildor.schemas.site import (
    Action,
    ArchHighlight,
    ArchLayer,
    ArchSection,
    BentoCell,
    BentoSection,
    CTASection,
    HeroSection,
    HowSection,
    HowStep,
    Platform,
    PlatformsSection,
    SiteContent,
    SiteSection,
)

_DOWNLOAD = Action(label="Download Free", href="#")

HERO = HeroSection(
    badge="v2",
    pill="Now available on all platforms",
    headline="One app. Infinite agents.",
    description=(
        "Buildor is a desktop & mobile app that gives you an AI workforce. Create agents "
        "that build websites, manage finances, handle marketing, protect your systems "
        "— and anything else you need."
    ),
    actions=[_DOWNLOAD, Action(label="Explore Platform →", href="#platform")],
    platforms=["Windows", "macOS", "iOS", "Android"],
)

BENTO = BentoSection(
    label="Platform",
    title="Your entire workflow. One application.",
    description=(
        "Buildor isn't just an agent builder — it's a complete operating environment with "
        "inbox, calendar, browser, planner, and AI security built in."
    ),
    core=BentoCell(
        eyebrow="Core Engine",
        title="Create agents for any role imaginable",
        description=(
            "Accountants, developers, designers, marketers, lawyers, therapists, support "
            "agents — describe the role, Buildor builds the agent."
        ),
    ),
    roles=[
        "Web Developer",
        "Accountant",
        "UI Designer",
        "Therapist",
        "Marketing",
        "Lawyer",
        "Support",
        "Data Analyst",
        "App Builder",
        "+ Anything",
    ],
    cells=[
        BentoCell(
            eyebrow="Build",
            title="Apps, sites & software",
            description=(
                "Agents create full websites, mobile apps, marketing tools, and design "
                "assets from your description."
            ),
        ),
        BentoCell(
            eyebrow="Communicate",
            title="Unified inbox",
            description=(
                "All messages in one place. Your agents can triage, draft, and respond "
                "automatically."
            ),
        ),
        BentoCell(
            eyebrow="Browse",
            title="Built-in browser",
            description="Agents research, scrape, and interact with any website autonomously.",
        ),
        BentoCell(
            eyebrow="Protect",
            title="AI Security Agent",
            description=(
                "An AI technician that monitors, maintains, and protects your entire "
                "system 24/7."
            ),
        ),
        BentoCell(
            eyebrow="Organize",
            title="Planner & Calendar",
            description="Schedule tasks, deadlines, and let agents auto-manage your workflow.",
        ),
    ],
)

ARCH = ArchSection(
    label="Architecture",
    title="The complete stack for AI agents.",
    description=(
        "Everything your AI workforce needs in one integrated platform — from agent "
        "creation to deployment, monitoring, and scaling."
    ),
    highlights=[
        ArchHighlight(icon="code", text="Open agent framework to build and test any role"),
        ArchHighlight(icon="cloud", text="Cloud platform for deploying and scaling agents"),
        ArchHighlight(icon="grid", text="Full-stack observability for every agent session"),
        ArchHighlight(icon="user", text="Inbox, calendar, browser, and planner tools built-in"),
        ArchHighlight(icon="shield", text="AI Security Agent for 24/7 system protection"),
    ],
    layers=[
        ArchLayer(label="Agent Builder", icon="🏗️"),
        ArchLayer(label="Chat Engine", icon="💬"),
        ArchLayer(label="Task Runner", icon="⚡"),
        ArchLayer(label="AI Models", icon="🧠"),
        ArchLayer(label="Security", icon="🛡️"),
        ArchLayer(label="Deploy", icon="🚀"),
    ],
    protocols=["WebRTC", "Agent API", "HTTP/WS"],
)

HOW = HowSection(
    label="How It Works",
    title="Three steps to your AI team.",
    steps=[
        HowStep(
            num=1,
            title="Describe the role",
            text=(
                'Tell Buildor what you need — "a web developer that builds React sites" or '
                '"an accountant that manages my invoices." Natural language, no code.'
            ),
        ),
        HowStep(
            num=2,
            title="Agent gets built",
            text=(
                "Buildor creates a specialized agent with the right tools, knowledge base, "
                "and workflows. Ready in seconds."
            ),
        ),
        HowStep(
            num=3,
            title="Give it work",
            text=(
                "Chat with your agent, assign tasks, or let it run autonomously. It uses "
                "Buildor's built-in tools — browser, inbox, calendar — to get things done."
            ),
        ),
        HowStep(
            num=4,
            title="Scale infinitely",
            text=(
                "Need more? Create another agent. Your AI workforce grows with your "
                "business — no hiring, no training, no overhead."
            ),
        ),
    ],
)

PLATFORMS = PlatformsSection(
    label="Available Everywhere",
    title="One app. Every device.",
    description=(
        "Download Buildor on any platform. Your agents and data sync seamlessly across "
        "all devices."
    ),
    platforms=[
        Platform(name="Windows", description="Native app"),
        Platform(name="macOS", description="Universal binary"),
        Platform(name="iOS", description="App Store"),
        Platform(name="Android", description="Play Store"),
        Platform(name="Web", description="Any browser"),
    ],
)

CTA = CTASection(
    label="Ready?",
    title="Start building with AI agents today.",
    description=(
        "Download Buildor for free and create your first agent in under 60 seconds. "
        "No credit card required."
    ),
    actions=[_DOWNLOAD, Action(label="See All Features →", href="#platform")],
)

SITE_CONTENT = SiteContent(
    hero=HERO,
    bento=BENTO,
    arch=ARCH,
    how=HOW,
    platforms=PLATFORMS,
    cta=CTA,
)

SECTION_NAMES = tuple(SiteContent.model_fields)


def get_section(name: str) -> SiteSection | None:
    """Return one section of the site by name, or None if unknown."""
    if name not in SECTION_NAMES:
        return None
    return getattr(SITE_CONTENT, name)  # type: ignore[no-any-return]
