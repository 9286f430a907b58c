"""Built-in assertion templates."""

from __future__ import annotations

from flicker_harness.assertors.scenario import ScenarioInstance
from flicker_harness.assertors.templates import AssertionTemplate, AssertionTemplateWithComponent
from flicker_harness.subjects.result import CheckResult
from flicker_harness.traces.component import ComponentMatcher


class AppWindowCoversFullScreenAtEnd(AssertionTemplateWithComponent):
    """The component's visible window region equals the display at the end."""

    def evaluate_component(
        self, instance: ScenarioInstance, component: ComponentMatcher
    ) -> CheckResult:
        layers_end = self.layers_subject(instance).trace.last()
        display_bounds = layers_end.physical_display_bounds
        if display_bounds is None:
            return CheckResult.failure(
                "Missing physical display bounds", layers_end.timestamp
            )
        wm_end = self.wm_subject(instance).last()
        return wm_end.visible_region(component).covers_exactly(display_bounds)


class EntireScreenCoveredAlways(AssertionTemplate):
    def do_evaluate(self, instance: ScenarioInstance) -> CheckResult:
        return self.layers_subject(instance).is_entire_screen_covered().for_all_entries()


class EntireScreenCoveredAtStartAndEnd(AssertionTemplate):
    def do_evaluate(self, instance: ScenarioInstance) -> CheckResult:
        subject = self.layers_subject(instance)
        return CheckResult.merge(
            [
                subject.first().is_entire_screen_covered(),
                subject.last().is_entire_screen_covered(),
            ]
        )


class WindowMovesToTop(AssertionTemplateWithComponent):
    def evaluate_component(
        self, instance: ScenarioInstance, component: ComponentMatcher
    ) -> CheckResult:
        return (
            self.wm_subject(instance)
            .is_app_window_not_on_top(component)
            .then()
            .is_app_window_on_top(component)
            .for_all_entries()
        )


class WindowMovesOutOfTop(AssertionTemplateWithComponent):
    def evaluate_component(
        self, instance: ScenarioInstance, component: ComponentMatcher
    ) -> CheckResult:
        return (
            self.wm_subject(instance)
            .is_app_window_on_top(component)
            .then()
            .is_app_window_not_on_top(component)
            .for_all_entries()
        )


class AppWindowBecomesVisible(AssertionTemplateWithComponent):
    def evaluate_component(
        self, instance: ScenarioInstance, component: ComponentMatcher
    ) -> CheckResult:
        return (
            self.wm_subject(instance)
            .is_app_window_invisible(component)
            .then()
            .is_app_window_visible(component)
            .for_all_entries()
        )


class AppWindowBecomesInvisible(AssertionTemplateWithComponent):
    def evaluate_component(
        self, instance: ScenarioInstance, component: ComponentMatcher
    ) -> CheckResult:
        return (
            self.wm_subject(instance)
            .is_app_window_visible(component)
            .then()
            .is_app_window_invisible(component)
            .for_all_entries()
        )


class AppWindowOnTopAtStart(AssertionTemplateWithComponent):
    def evaluate_component(
        self, instance: ScenarioInstance, component: ComponentMatcher
    ) -> CheckResult:
        return self.wm_subject(instance).first().is_app_window_on_top(component)


class AppWindowOnTopAtEnd(AssertionTemplateWithComponent):
    def evaluate_component(
        self, instance: ScenarioInstance, component: ComponentMatcher
    ) -> CheckResult:
        return self.wm_subject(instance).last().is_app_window_on_top(component)


class LayerBecomesVisible(AssertionTemplateWithComponent):
    def evaluate_component(
        self, instance: ScenarioInstance, component: ComponentMatcher
    ) -> CheckResult:
        return (
            self.layers_subject(instance)
            .is_invisible(component)
            .then()
            .is_visible(component)
            .for_all_entries()
        )


class LayerBecomesInvisible(AssertionTemplateWithComponent):
    def evaluate_component(
        self, instance: ScenarioInstance, component: ComponentMatcher
    ) -> CheckResult:
        return (
            self.layers_subject(instance)
            .is_visible(component)
            .then()
            .is_invisible(component)
            .for_all_entries()
        )


class NonAppWindowIsVisibleAlways(AssertionTemplateWithComponent):
    def evaluate_component(
        self, instance: ScenarioInstance, component: ComponentMatcher
    ) -> CheckResult:
        return self.wm_subject(instance).is_window_visible(component).for_all_entries()


class LayerIsVisibleAtStartAndEnd(AssertionTemplateWithComponent):
    def evaluate_component(
        self, instance: ScenarioInstance, component: ComponentMatcher
    ) -> CheckResult:
        subject = self.layers_subject(instance)
        return CheckResult.merge(
            [subject.first().is_visible(component), subject.last().is_visible(component)]
        )


class RotationMatchesScenario(AssertionTemplate):
    """Display rotation is the scenario's start rotation first and its end rotation last."""

    def do_evaluate(self, instance: ScenarioInstance) -> CheckResult:
        subject = self.wm_subject(instance)
        return CheckResult.merge(
            [
                subject.first().has_rotation(instance.start_rotation),
                subject.last().has_rotation(instance.end_rotation),
            ]
        )


BUILTIN_TEMPLATES = (
    AppWindowCoversFullScreenAtEnd,
    EntireScreenCoveredAlways,
    EntireScreenCoveredAtStartAndEnd,
    WindowMovesToTop,
    WindowMovesOutOfTop,
    AppWindowBecomesVisible,
    AppWindowBecomesInvisible,
    AppWindowOnTopAtStart,
    AppWindowOnTopAtEnd,
    LayerBecomesVisible,
    LayerBecomesInvisible,
    NonAppWindowIsVisibleAlways,
    LayerIsVisibleAtStartAndEnd,
    RotationMatchesScenario,
)
