from unittest import TestCase

from unittest_parametrize import ParametrizedTestCase, parametrize

from lifecycle import CompensationLog, Guard, NotFoundError, PreconditionError, Saga
from lifecycle.saga import AlreadyApplied


class TestCompensationLog(TestCase):
    def test_drain_runs_newest_first(self) -> None:
        log = CompensationLog('test')
        calls: list[str] = []

        log.push('first', lambda: calls.append('first'))
        log.push('second', lambda: calls.append('second'))
        log.push('third', lambda: calls.append('third'))

        failures = log.drain()

        self.assertEqual(calls, ['third', 'second', 'first'])
        self.assertEqual(failures, [])
        self.assertEqual(len(log), 0)

    def test_drain_continues_after_failure(self) -> None:
        log = CompensationLog('test')
        calls: list[str] = []

        def broken() -> None:
            raise RuntimeError('store unavailable')

        log.push('first', lambda: calls.append('first'))
        log.push('broken', broken)
        log.push('third', lambda: calls.append('third'))

        with self.assertLogs('lifecycle.saga', level='ERROR') as cm:
            failures = log.drain()

        self.assertEqual(calls, ['third', 'first'])
        self.assertEqual(len(failures), 1)
        self.assertEqual(failures[0].description, 'broken')
        self.assertEqual(str(failures[0].error), 'store unavailable')
        self.assertIn('Compensation "broken" of saga test failed', cm.records[0].message)


class TestSaga(ParametrizedTestCase):
    def test_success(self) -> None:
        def body(saga: Saga) -> int:
            value = saga.guard(lambda: Guard.proceed(20))
            return saga.step('add', lambda: value + 1)

        result = Saga('test').run(body, success_message='Done')

        self.assertTrue(result.success)
        self.assertFalse(result.short_circuited)
        self.assertEqual(result.message, 'Done')
        self.assertEqual(result.data, 21)

    def test_guard_short_circuit(self) -> None:
        calls: list[str] = []

        def body(saga: Saga) -> str:
            saga.guard(lambda: Guard.already_applied('existing'))
            saga.step('never', lambda: calls.append('never'))
            return 'new'

        result = Saga('test').run(body, success_message='Done', already_applied_message='Already there')

        self.assertTrue(result.success)
        self.assertTrue(result.short_circuited)
        self.assertEqual(result.message, 'Already there')
        self.assertEqual(result.data, 'existing')
        self.assertEqual(calls, [])

    def test_guard_fail(self) -> None:
        def body(saga: Saga) -> None:
            saga.guard(lambda: Guard.fail(NotFoundError('Resignation', 'abc')))

        result = Saga('test').run(body, success_message='Done')

        self.assertFalse(result.success)
        self.assertIsInstance(result.error, NotFoundError)
        self.assertEqual(result.message, "Resignation 'abc' not found")
        self.assertFalse(result.manual_intervention)

    @parametrize(
        ('error',),
        [
            (RuntimeError('write failed'),),
            (PreconditionError('write failed'),),
        ],
    )
    def test_step_failure_compensates(self, error: Exception) -> None:
        undone: list[int] = []

        def fail() -> None:
            raise error

        def body(saga: Saga) -> None:
            saga.step('one', lambda: 1, compensate=undone.append)
            saga.step('two', lambda: 2, compensate=undone.append)
            saga.step('three', fail, compensate=undone.append)

        result = Saga('test').run(body, success_message='Done')

        self.assertFalse(result.success)
        self.assertIs(result.error, error)
        self.assertEqual(result.message, 'write failed')
        self.assertEqual(undone, [2, 1])
        self.assertFalse(result.manual_intervention)

    def test_compensation_failure_keeps_original_error(self) -> None:
        def fail_step() -> None:
            raise RuntimeError('delete failed')

        def fail_compensation(_: int) -> None:
            raise RuntimeError('revert failed')

        def body(saga: Saga) -> None:
            saga.step('mark approved', lambda: 1, compensate=fail_compensation)
            saga.step('remove employee', fail_step)

        result = Saga('test').run(body, success_message='Done')

        self.assertFalse(result.success)
        self.assertEqual(str(result.error), 'delete failed')
        self.assertTrue(result.manual_intervention)
        self.assertEqual([f.description for f in result.compensation_failures], ['mark approved'])
        self.assertEqual(result.message, 'delete failed. Manual intervention required: could not undo mark approved')

    def test_already_applied_mid_saga_compensates(self) -> None:
        undone: list[int] = []

        def lose_race() -> None:
            raise AlreadyApplied('winner')

        def body(saga: Saga) -> str:
            saga.step('deduct', lambda: 5, compensate=undone.append)
            saga.step('flip', lose_race)
            return 'loser'

        result = Saga('test').run(body, success_message='Done', already_applied_message='Already there')

        self.assertTrue(result.success)
        self.assertTrue(result.short_circuited)
        self.assertEqual(result.data, 'winner')
        self.assertEqual(undone, [5])
