"""
Adaptation profile catalog

This module defines the fixed set of adaptation profiles a session can
select from. Each profile pairs a trigger metric vector with the UI policy to
apply when the user's state resembles it.
"""

from typing import Iterable, Iterator, List, Optional

from ..core.data_types import (
    AdaptationDescriptor, AdaptationProfile, MetricVector,
    UIComplexity, ColorScheme, AnimationIntensity, InteractionStyle,
    ContentDensity, CognitiveSupport,
)


def default_profiles() -> List[AdaptationProfile]:
    """
    Build the standard profiles

    A fresh list of fresh objects is returned on every call, so catalogs
    built from it never share mutable state.
    """
    return [
        AdaptationProfile(
            profile_id="high-cognitive-load",
            trigger=MetricVector(cognitive_load=0.8, stress=0.7),
            descriptor=AdaptationDescriptor(
                ui_complexity=UIComplexity.MINIMAL,
                color_scheme=ColorScheme.HIGH_CONTRAST,
                animation_intensity=AnimationIntensity.NONE,
                interaction_style=InteractionStyle.PASSIVE,
                content_density=ContentDensity.SPARSE,
                cognitive_support=CognitiveSupport.HIGH,
            ),
            confidence=0.9,
        ),
        AdaptationProfile(
            profile_id="flow-state",
            trigger=MetricVector(flow=0.8, attention=0.7, engagement=0.8),
            descriptor=AdaptationDescriptor(
                ui_complexity=UIComplexity.MINIMAL,
                color_scheme=ColorScheme.NORMAL,
                animation_intensity=AnimationIntensity.SUBTLE,
                interaction_style=InteractionStyle.PASSIVE,
                content_density=ContentDensity.NORMAL,
                cognitive_support=CognitiveSupport.LOW,
            ),
            confidence=0.85,
        ),
        AdaptationProfile(
            profile_id="low-attention",
            trigger=MetricVector(attention=0.3, engagement=0.4),
            descriptor=AdaptationDescriptor(
                ui_complexity=UIComplexity.STANDARD,
                color_scheme=ColorScheme.HIGH_CONTRAST,
                animation_intensity=AnimationIntensity.ENHANCED,
                interaction_style=InteractionStyle.PROACTIVE,
                content_density=ContentDensity.SPARSE,
                cognitive_support=CognitiveSupport.HIGH,
            ),
            confidence=0.8,
        ),
        AdaptationProfile(
            profile_id="fatigue",
            trigger=MetricVector(fatigue=0.7, cognitive_load=0.6),
            descriptor=AdaptationDescriptor(
                ui_complexity=UIComplexity.MINIMAL,
                color_scheme=ColorScheme.LOW_CONTRAST,
                animation_intensity=AnimationIntensity.NONE,
                interaction_style=InteractionStyle.PASSIVE,
                content_density=ContentDensity.SPARSE,
                cognitive_support=CognitiveSupport.HIGH,
            ),
            confidence=0.75,
        ),
        AdaptationProfile(
            profile_id="relaxed",
            trigger=MetricVector(relaxation=0.8, meditation=0.6),
            descriptor=AdaptationDescriptor(
                ui_complexity=UIComplexity.DETAILED,
                color_scheme=ColorScheme.NORMAL,
                animation_intensity=AnimationIntensity.SUBTLE,
                interaction_style=InteractionStyle.STANDARD,
                content_density=ContentDensity.NORMAL,
                cognitive_support=CognitiveSupport.MEDIUM,
            ),
            confidence=0.7,
        ),
    ]


class AdaptationCatalog:
    """
    Ordered, fixed-size collection of adaptation profiles

    Declaration order is significant: it breaks ties during selection.
    Profiles cannot be added or removed after construction; only their
    confidence changes, through the feedback learner.
    """

    def __init__(self, profiles: Optional[Iterable[AdaptationProfile]] = None):
        self._profiles = list(profiles) if profiles is not None else default_profiles()

        ids = [p.profile_id for p in self._profiles]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate profile ids in catalog: {ids}")

    def __iter__(self) -> Iterator[AdaptationProfile]:
        return iter(self._profiles)

    def __len__(self) -> int:
        return len(self._profiles)

    def __contains__(self, profile_id: str) -> bool:
        return self.get(profile_id) is not None

    def get(self, profile_id: str) -> Optional[AdaptationProfile]:
        for profile in self._profiles:
            if profile.profile_id == profile_id:
                return profile
        return None

    def ids(self) -> List[str]:
        return [p.profile_id for p in self._profiles]

    def snapshot(self) -> List[AdaptationProfile]:
        """Independent copies of every profile, in declaration order"""
        return [p.snapshot() for p in self._profiles]
