from pclocator.locate.locators import PresenceConditionLocator, BuildSystemLocator, ConfigurationSpaceLocator

__all__ = ["PresenceConditionLocator", "BuildSystemLocator", "ConfigurationSpaceLocator"]
