"""
Unit tests for the ScreenFlowController.

Checks the transition table, history handling, order resets on
cancel/confirm, illegal events and session round-trips.
"""

from decimal import Decimal

import pytest

from core.exceptions import InvalidTransitionError
from core.order_state import OrderState
from core.screen_flow import FlowEvent, Screen, ScreenFlowController
from models.menu import MenuCategory


FORWARD = [
    (Screen.START, FlowEvent.START, Screen.ENTREE),
    (Screen.ENTREE, FlowEvent.NEXT, Screen.SIDE_DISH),
    (Screen.SIDE_DISH, FlowEvent.NEXT, Screen.ACCOMPANIMENT),
    (Screen.ACCOMPANIMENT, FlowEvent.NEXT, Screen.CHECKOUT),
    (Screen.CHECKOUT, FlowEvent.NEXT, Screen.START),
]

ORDERING_SCREENS = [Screen.ENTREE, Screen.SIDE_DISH, Screen.ACCOMPANIMENT, Screen.CHECKOUT]


def advance_to(flow, target):
    """Dispatch forward events from START until target is reached."""
    for screen, event, _ in FORWARD:
        if flow.current_screen is target:
            return
        assert flow.current_screen is screen
        flow.dispatch(event)
    assert flow.current_screen is target


class TestTransitionTable:
    """Every legal (screen, event) pair."""

    def test_initial_screen_is_start(self, flow):
        assert flow.current_screen is Screen.START
        assert not flow.can_navigate_back

    def test_full_forward_cycle(self, flow):
        for screen, event, expected in FORWARD:
            assert flow.current_screen is screen
            assert flow.dispatch(event) is expected
            assert flow.current_screen is expected

    @pytest.mark.parametrize("screen", ORDERING_SCREENS)
    def test_cancel_returns_to_start(self, flow, screen):
        advance_to(flow, screen)
        assert flow.dispatch(FlowEvent.CANCEL) is Screen.START

    def test_flow_is_cyclic(self, flow):
        for _ in range(3):
            for _, event, _ in FORWARD:
                flow.dispatch(event)
        assert flow.current_screen is Screen.START

    @pytest.mark.parametrize("screen,event", [
        (Screen.START, FlowEvent.NEXT),
        (Screen.START, FlowEvent.CANCEL),
        (Screen.ENTREE, FlowEvent.START),
        (Screen.SIDE_DISH, FlowEvent.START),
        (Screen.ACCOMPANIMENT, FlowEvent.START),
        (Screen.CHECKOUT, FlowEvent.START),
    ])
    def test_illegal_events_raise(self, order, screen, event):
        flow = ScreenFlowController(order, initial=screen, history=[Screen.START])

        with pytest.raises(InvalidTransitionError) as exc_info:
            flow.dispatch(event)

        assert exc_info.value.screen is screen
        assert exc_info.value.event is event
        assert flow.current_screen is screen
        assert flow.history == (Screen.START,)

    def test_illegal_event_leaves_order_alone(self, order, burrito):
        flow = ScreenFlowController(order, initial=Screen.ENTREE)
        order.update_entree(burrito)

        with pytest.raises(InvalidTransitionError):
            flow.dispatch(FlowEvent.START)

        assert order.selected_entree == burrito

    def test_allowed_events(self, flow):
        assert flow.allowed_events() == [FlowEvent.START]

        flow.dispatch(FlowEvent.START)
        assert set(flow.allowed_events()) == {FlowEvent.NEXT, FlowEvent.CANCEL, FlowEvent.BACK_UP}


class TestOrderReset:
    """Cancel and confirm reset the whole order."""

    def test_scenario_checkout_totals(self, flow, order, burrito, chips, salsa):
        assert flow.dispatch(FlowEvent.START) is Screen.ENTREE
        order.update_entree(burrito)
        assert flow.dispatch(FlowEvent.NEXT) is Screen.SIDE_DISH
        order.update_side_dish(chips)
        assert flow.dispatch(FlowEvent.NEXT) is Screen.ACCOMPANIMENT
        order.update_accompaniment(salsa)
        assert flow.dispatch(FlowEvent.NEXT) is Screen.CHECKOUT

        totals = order.get_totals()
        assert totals.item_total == Decimal("7.50")
        assert totals.tax == Decimal("0.60")
        assert totals.grand_total == Decimal("8.10")

    def test_cancel_from_accompaniment_resets(self, flow, order, burrito, chips, salsa):
        advance_to(flow, Screen.ACCOMPANIMENT)
        order.update_entree(burrito)
        order.update_side_dish(chips)
        order.update_accompaniment(salsa)

        assert flow.dispatch(FlowEvent.CANCEL) is Screen.START
        assert order.is_empty
        assert order.get_totals().grand_total == 0

    def test_confirm_resets(self, flow, order, burrito):
        advance_to(flow, Screen.CHECKOUT)
        order.update_entree(burrito)

        flow.dispatch(FlowEvent.NEXT)

        assert order.is_empty

    def test_forward_navigation_keeps_selections(self, flow, order, burrito):
        flow.dispatch(FlowEvent.START)
        order.update_entree(burrito)
        flow.dispatch(FlowEvent.NEXT)
        flow.dispatch(FlowEvent.NEXT)
        assert order.selected_entree == burrito

    def test_reset_notifies_once(self, flow, order):
        calls = []
        order.subscribe(lambda o: calls.append(o))
        advance_to(flow, Screen.SIDE_DISH)

        flow.dispatch(FlowEvent.CANCEL)

        assert len(calls) == 1

    def test_listener_sees_start_screen_on_reset(self, flow, order):
        screens = []
        order.subscribe(lambda o: screens.append(flow.current_screen))
        advance_to(flow, Screen.CHECKOUT)

        flow.dispatch(FlowEvent.NEXT)

        assert screens == [Screen.START]

    @pytest.mark.parametrize("screen,event", [
        (Screen.ENTREE, FlowEvent.CANCEL),
        (Screen.ACCOMPANIMENT, FlowEvent.CANCEL),
        (Screen.CHECKOUT, FlowEvent.NEXT),
    ])
    def test_failing_listener_leaves_reset_complete(self, flow, order, burrito, screen, event):
        advance_to(flow, screen)
        order.update_entree(burrito)

        def broken_listener(_order):
            raise RuntimeError("listener failed")

        order.subscribe(broken_listener)

        with pytest.raises(RuntimeError):
            flow.dispatch(event)

        assert order.is_empty
        assert flow.current_screen is Screen.START
        assert not flow.can_navigate_back


class TestHistory:
    """Explicit back stack."""

    def test_forward_transitions_push(self, flow):
        advance_to(flow, Screen.ACCOMPANIMENT)
        assert flow.history == (Screen.START, Screen.ENTREE, Screen.SIDE_DISH)
        assert flow.can_navigate_back

    def test_back_up_pops(self, flow):
        advance_to(flow, Screen.ACCOMPANIMENT)

        assert flow.dispatch(FlowEvent.BACK_UP) is Screen.SIDE_DISH
        assert flow.dispatch(FlowEvent.BACK_UP) is Screen.ENTREE
        assert flow.dispatch(FlowEvent.BACK_UP) is Screen.START
        assert not flow.can_navigate_back

    def test_back_up_does_not_reset(self, flow, order, burrito, chips):
        flow.dispatch(FlowEvent.START)
        order.update_entree(burrito)
        flow.dispatch(FlowEvent.NEXT)
        order.update_side_dish(chips)

        flow.dispatch(FlowEvent.BACK_UP)

        assert flow.current_screen is Screen.ENTREE
        assert order.selected_entree == burrito
        assert order.selected_side_dish == chips

    def test_back_up_with_empty_history_is_noop(self, order):
        flow = ScreenFlowController(order, initial=Screen.ENTREE)
        assert not flow.can_navigate_back

        assert flow.dispatch(FlowEvent.BACK_UP) is Screen.ENTREE
        assert flow.current_screen is Screen.ENTREE

    def test_back_up_on_start_is_noop(self, flow):
        assert flow.dispatch(FlowEvent.BACK_UP) is Screen.START

    @pytest.mark.parametrize("event", [FlowEvent.CANCEL, FlowEvent.NEXT])
    def test_return_to_start_clears_history(self, flow, event):
        advance_to(flow, Screen.CHECKOUT)
        flow.dispatch(event)
        assert flow.history == ()
        assert not flow.can_navigate_back

    def test_history_is_a_copy(self, flow):
        flow.dispatch(FlowEvent.START)
        history = flow.history
        flow.dispatch(FlowEvent.NEXT)
        assert history == (Screen.START,)


class TestScreen:
    """Screen metadata."""

    def test_title_keys(self):
        assert Screen.START.title_key == "screens.app_name"
        assert Screen.CHECKOUT.title_key == "screens.order_checkout"

    def test_menu_categories(self):
        assert Screen.ENTREE.menu_category is MenuCategory.ENTREE
        assert Screen.SIDE_DISH.menu_category is MenuCategory.SIDE_DISH
        assert Screen.ACCOMPANIMENT.menu_category is MenuCategory.ACCOMPANIMENT
        assert Screen.START.menu_category is None
        assert Screen.CHECKOUT.menu_category is None


class TestSessionStorage:
    """to_dict / from_dict."""

    def test_round_trip(self, flow, order):
        advance_to(flow, Screen.ACCOMPANIMENT)
        flow.dispatch(FlowEvent.BACK_UP)

        restored = ScreenFlowController.from_dict(flow.to_dict(), order)

        assert restored.current_screen is Screen.SIDE_DISH
        assert restored.history == (Screen.START, Screen.ENTREE)

    def test_empty_data_starts_fresh(self, order):
        restored = ScreenFlowController.from_dict({}, order)
        assert restored.current_screen is Screen.START
        assert restored.history == ()

    def test_unknown_screen_rejected(self, order):
        with pytest.raises(ValueError):
            ScreenFlowController.from_dict({"screen": "DESSERT"}, order)

    def test_restored_controller_resets_given_order(self, burrito):
        order = OrderState()
        order.update_entree(burrito)
        flow = ScreenFlowController.from_dict({"screen": "CHECKOUT", "history": ["START"]}, order)

        flow.dispatch(FlowEvent.CANCEL)

        assert order.is_empty
