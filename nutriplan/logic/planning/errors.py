"""Planner errors surfaced to the web layer."""


class WizardError(Exception):
    status_code = 400


class InvalidTransition(WizardError):
    """The requested action is not allowed from the current step."""
    status_code = 409

    def __init__(self, action: str, step: str):
        super().__init__(f"Cannot {action} from step '{step}'")
        self.action = action
        self.step = step


class ConfirmationRequired(WizardError):
    status_code = 400


class SlotNotFound(WizardError):
    status_code = 404

    def __init__(self, day_index: int, meal_type: str = ""):
        where = f"day {day_index}" + (f", meal '{meal_type}'" if meal_type else "")
        super().__init__(f"No such slot: {where}")
        self.day_index = day_index
        self.meal_type = meal_type


__all__ = ['WizardError', 'InvalidTransition', 'ConfirmationRequired', 'SlotNotFound']
