"""Marketing site content schemas."""

from pydantic import BaseModel


class Action(BaseModel):
    label: str
    href: str


class HeroSection(BaseModel):
    badge: str
    pill: str
    headline: str
    description: str
    actions: list[Action]
    platforms: list[str]


class BentoCell(BaseModel):
    eyebrow: str
    title: str
    description: str


class BentoSection(BaseModel):
    label: str
    title: str
    description: str
    core: BentoCell
    roles: list[str]
    cells: list[BentoCell]


class ArchHighlight(BaseModel):
    icon: str
    text: str


class ArchLayer(BaseModel):
    label: str
    icon: str


class ArchSection(BaseModel):
    label: str
    title: str
    description: str
    highlights: list[ArchHighlight]
    layers: list[ArchLayer]
    protocols: list[str]


class HowStep(BaseModel):
    num: int
    title: str
    text: str


class HowSection(BaseModel):
    label: str
    title: str
    steps: list[HowStep]


class Platform(BaseModel):
    name: str
    description: str


class PlatformsSection(BaseModel):
    label: str
    title: str
    description: str
    platforms: list[Platform]


class CTASection(BaseModel):
    label: str
    title: str
    description: str
    actions: list[Action]


class SiteContent(BaseModel):
    hero: HeroSection
    bento: BentoSection
    arch: ArchSection
    how: HowSection
    platforms: PlatformsSection
    cta: CTASection


SiteSection = HeroSection | BentoSection | ArchSection | HowSection | PlatformsSection | CTASection
