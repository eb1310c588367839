'''
RPN machine evaluation tests
'''

import math

from rpnbrain.machine import Machine, Evaluation
from rpnbrain.ops import Operand, Variable

from pytest import approx, raises


def test_operand_is_its_own_value(machine):
    for value in 1.5, -2, 0, 1e300:
        assert machine.push_operand(value).result == value
        assert machine.evaluate() == value


def test_addition(machine):
    machine.push_operand(3)
    machine.push_operand(4)
    assert machine.perform_operation('+').result == 7.0


def test_division_reads_left_to_right(machine):
    machine.push_operand(4)
    machine.push_operand(2)
    assert machine.perform_operation('÷').result == 2.0


def test_subtraction_reads_left_to_right(machine):
    machine.push_operand(10)
    machine.push_operand(3)
    assert machine.perform_operation('-').result == 7.0


def test_multiplication(machine):
    machine.push_operand(6)
    machine.push_operand(7)
    assert machine.perform_operation('×').result == 42.0


def test_square_root(machine):
    machine.push_operand(2)
    assert machine.perform_operation('√').result == 1.4142135623730951


def test_trigonometry(machine):
    machine.push_constant('π')
    assert machine.perform_operation('cos').result == approx(-1.0)
    machine.push_operand(0)
    assert machine.perform_operation('sin').result == 0.0


def test_negation(machine):
    machine.push_operand(3)
    assert machine.perform_operation('±').result == -3.0


def test_constant(machine):
    assert machine.push_constant('π').result == math.pi


def test_operation_on_empty_stack(machine):
    for symbol in '+', '√':
        evaluation = machine.perform_operation(symbol)
        assert evaluation == Evaluation(None, '[] = None with [] left over')
        assert machine.stack == ()
    assert machine.evaluate() is None
    assert machine.render() == ''


def test_operation_after_reset(machine):
    machine.push_operand(1)
    machine.reset()
    machine.perform_operation('×')
    assert machine.stack == ()


def test_long_chain(machine):
    machine.import_program(['0'] + ['1', '+'] * 5000)
    assert machine.evaluate() == 5000.0
    machine.push_operand(2)
    assert machine.perform_operation('×').result == 10000.0


def test_long_chain_with_missing_operand(machine):
    machine.import_program(['x'] + ['1', '+'] * 5000)
    evaluation = machine.perform_operation('±')
    assert evaluation.result is None
    assert evaluation.trace.endswith('= None with [] left over')
    machine.variables['x'] = 1
    assert machine.evaluate() == -5001.0


def test_failure_leaves_rest_of_stack(machine):
    for op in 7, 'x':
        machine.push_operand(op)
    assert machine.perform_operation('√').trace == \
        '[7, x, √] = None with [7] left over'


def test_missing_operand(machine):
    machine.push_operand(1)
    evaluation = machine.perform_operation('+')
    assert evaluation.result is None
    assert len(machine.stack) == 2


def test_unary_without_operand(machine):
    assert machine.perform_operation('√').result is None
    machine.push_operand(9)
    assert machine.evaluate() == 9.0


def test_unknown_symbol_is_ignored(machine):
    machine.push_operand(5)
    assert machine.perform_operation('^').result == 5.0
    assert machine.stack == (Operand(5.0),)


def test_constant_is_not_an_operation(machine):
    machine.perform_operation('π')
    assert machine.stack == ()


def test_operation_is_not_a_constant(machine):
    machine.push_constant('+')
    assert machine.stack == ()


def test_nested_expression(machine):
    # (1 + 2) × (10 - 4) ÷ 3
    for op in 1, 2, '+', 10, 4, '-', '×', 3, '÷':
        if isinstance(op, str):
            result = machine.perform_operation(op).result
        else:
            result = machine.push_operand(op).result
    assert result == 6.0


def test_evaluates_top_expression_only(machine):
    for value in 1, 2, 3:
        machine.push_operand(value)
    assert machine.perform_operation('+').result == 5.0


def test_evaluate_does_not_mutate(machine):
    machine.push_operand(3)
    machine.push_operand(4)
    machine.perform_operation('×')
    stack = machine.stack
    assert machine.evaluate() == machine.evaluate() == 12.0
    assert machine.stack == stack


def test_variables(machine):
    assert machine.push_operand('x').result is None
    assert machine.stack == (Variable('x'),)
    machine.variables['x'] = 5
    assert machine.evaluate() == 5


def test_unresolved_variable_in_expression(machine):
    machine.push_operand('x')
    machine.push_operand(2)
    assert machine.perform_operation('×').result is None
    machine.variables['x'] = 3.5
    assert machine.evaluate() == 7.0


def test_reset(machine):
    machine.variables['x'] = 1
    machine.push_operand('x')
    machine.push_operand(2)
    machine.perform_operation('+')
    machine.reset()
    assert machine.evaluate() is None
    assert machine.render() == ''
    assert machine.variables == {}


def test_division_by_zero(machine):
    for dividend, result in (1, math.inf), (-1, -math.inf):
        machine.reset()
        machine.push_operand(dividend)
        machine.push_operand(0)
        assert machine.perform_operation('÷').result == result


def test_zero_over_zero(machine):
    machine.push_operand(0)
    machine.push_operand(0)
    assert math.isnan(machine.perform_operation('÷').result)


def test_domain_errors_are_nan(machine):
    machine.push_operand(-1)
    assert math.isnan(machine.perform_operation('√').result)
    machine.push_operand(math.inf)
    assert math.isnan(machine.perform_operation('sin').result)


def test_nan_propagates(machine):
    machine.push_operand(math.nan)
    machine.push_operand(1)
    assert math.isnan(machine.perform_operation('+').result)


def test_trace(machine):
    assert machine.push_operand(3) == Evaluation(
        3.0, '[3] = 3.0 with [] left over')
    machine.push_operand(4)
    assert machine.perform_operation('+').trace == \
        '[3, 4, +] = 7.0 with [] left over'


def test_trace_leftovers(machine):
    machine.push_operand(1)
    machine.push_operand(2)
    assert machine.push_operand(3).trace == \
        '[1, 2, 3] = 3.0 with [1, 2] left over'


def test_trace_is_logged(machine, caplog):
    caplog.set_level('DEBUG', logger='rpnbrain.machine')
    machine.push_operand(1)
    assert '[1] = 1.0 with [] left over' in caplog.text


def test_operator_table_is_read_only(machine):
    with raises(TypeError):
        machine.known_ops['^'] = machine.known_ops['×']
    assert set(machine.known_ops) == {'×', '÷', '+', '-', '√', 'sin', 'cos',
                                      '±', 'π'}


def test_machines_are_independent():
    first, second = Machine(), Machine()
    first.push_operand(1)
    first.variables['x'] = 2
    assert second.stack == ()
    assert second.variables == {}
