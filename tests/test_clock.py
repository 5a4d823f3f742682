"""
Tests for ClockFaceController: time decomposition, target pushing and the
skip-if-unchanged policy.
"""

from datetime import datetime
from unittest.mock import MagicMock

import pytest

from handclock.animator import HandAnimator
from handclock.cell import Hand
from handclock.clock import ClockFaceController, decompose_time
from handclock.glyphs import CELLS_PER_DIGIT, cell_angles


def finish_animations(controller, fake_clock):
    fake_clock.advance_ms(250)
    controller.advance()
    assert not controller.is_any_animation_active()


class TestDecomposeTime:
    def test_leading_zeros(self):
        assert decompose_time(9, 5, 7) == [0, 9, 0, 5, 0, 7]

    def test_two_digit_values(self):
        assert decompose_time(23, 59, 48) == [2, 3, 5, 9, 4, 8]

    def test_midnight(self):
        assert decompose_time(0, 0, 0) == [0] * 6


class TestUpdate:
    """Pushing digit patterns into the cell grids."""

    def test_initial_cells_rest(self, controller):
        for digit in controller.digits:
            for cell in digit.cells:
                assert cell.hour_target == 225
                assert cell.minute_target == 225
        assert controller.get_current_time_string() == "--:--:--"

    def test_targets_follow_patterns(self, controller):
        controller.update(9, 5, 7)

        values = [0, 9, 0, 5, 0, 7]
        for digit, value in zip(controller.digits, values):
            assert digit.value == value
            for index, cell in enumerate(digit.cells):
                assert (cell.hour_target, cell.minute_target) == cell_angles(value, index)

    def test_zero_corner_cells(self, controller):
        controller.update(0, 0, 0)
        first = controller.digits[0].cells[0]
        last = controller.digits[0].cells[23]
        assert (first.hour_target, first.minute_target) == (90, 180)
        assert (last.hour_target, last.minute_target) == (270, 0)

    def test_second_update_with_same_time_starts_nothing(self, controller, animator):
        assert controller.update(9, 5, 7) > 0
        started = animator.transitions_started

        assert controller.update(9, 5, 7) == 0
        assert animator.transitions_started == started

    def test_only_changed_digit_animates(self, controller, fake_clock):
        controller.update(9, 5, 7)
        finish_animations(controller, fake_clock)

        assert controller.update(9, 5, 8) > 0
        for digit in controller.digits[:5]:
            for cell in digit.cells:
                assert not controller.animator.is_animating(cell)
        assert any(controller.animator.is_animating(cell) for cell in controller.digits[5].cells)

    def test_blank_cells_stay_parked(self, controller):
        # Digit 7 has blank cells, which already sit at the resting angle
        controller.update(7, 7, 7)
        for index in (8, 9, 12, 13, 16, 17, 20, 21):
            cell = controller.digits[1].cells[index]
            assert not controller.animator.is_animating(cell)
            assert cell.animated_hour == 225

    def test_always_animate_pushes_every_cell(self, small_style):
        animator = MagicMock(spec=HandAnimator)
        animator.begin_transition.return_value = False
        controller = ClockFaceController(animator=animator, style=small_style)

        # Every cell already holds the targets for 8
        for index, cell in enumerate(controller.digits[0].cells):
            cell.hour_target, cell.minute_target = cell_angles(8, index)

        controller.apply_digit(0, 8)
        assert animator.begin_transition.call_count == 0

        controller.apply_digit(0, 8, always_animate=True)
        assert animator.begin_transition.call_count == 2 * CELLS_PER_DIGIT

    def test_invalid_digit_fails_fast(self, controller):
        with pytest.raises(KeyError):
            controller.apply_digit(0, 10)

    def test_converges_to_glyph_angles(self, controller, fake_clock):
        controller.update(12, 34, 56)
        for _ in range(20):
            fake_clock.advance_ms(16)
            controller.advance()

        for digit in controller.digits:
            for index, cell in enumerate(digit.cells):
                hour, minute = cell_angles(digit.value, index)
                assert cell.animated_hour == hour % 360
                assert cell.animated_minute == minute % 360


class TestTick:
    def test_tick_reads_wall_clock(self, controller, wall_time):
        controller.tick()
        assert controller.get_current_time_string() == "09:05:07"
        assert [d.value for d in controller.digits] == [0, 9, 0, 5, 0, 7]

    def test_repeated_ticks_within_same_second(self, controller, animator):
        controller.tick()
        started = animator.transitions_started
        controller.tick()
        assert animator.transitions_started == started

    def test_tick_after_second_changes(self, controller, wall_time, animator):
        controller.tick()
        started = animator.transitions_started
        wall_time.state['now'] = datetime(2024, 1, 1, 9, 5, 8)
        assert controller.tick() > 0
        assert animator.transitions_started > started

    def test_status(self, controller):
        controller.tick()
        status = controller.get_status()
        assert status['time'] == "09:05:07"
        assert status['digits']['hour_ones'] == 9
        assert status['digits']['second_ones'] == 7
        assert status['active_animations'] > 0


class TestRender:
    def test_display_size(self, controller):
        # 6 digits of 4x10px cells, gaps 2/4/2/4/2
        assert controller.get_display_size() == (254, 60)

    def test_render_matches_display_size(self, controller):
        img = controller.render()
        assert img.size == controller.get_display_size()
        assert img.mode == 'RGB'

    def test_cell_border_drawn(self, controller, small_style):
        img = controller.render()
        assert img.getpixel((0, 0)) == small_style.rgb('border_color')

    def test_gap_uses_background(self, controller):
        img = controller.render(background_color=(1, 2, 3))
        assert img.getpixel((41, 30)) == (1, 2, 3)

    def test_hand_position_is_clockwise_from_up(self, controller):
        cell = controller.digits[0].cells[0]
        cell.animated_hour = 90
        cell.animated_minute = 90

        img = controller.render()
        hand = controller.style.rgb('hand_color')
        # 10px cell: center (5, 5), hands reach 4px
        assert img.getpixel((8, 5)) == hand
        assert img.getpixel((5, 2)) != hand
        assert img.getpixel((2, 5)) != hand

    def test_hand_helpers(self, controller):
        cell = controller.digits[0].cells[0]
        cell.set_target(Hand.MINUTE, 45)
        cell.set_animated(Hand.MINUTE, 30)
        assert cell.target(Hand.MINUTE) == 45
        assert cell.animated(Hand.MINUTE) == 30
        assert cell.target(Hand.HOUR) == 225
