"""PetLockRegistry 테스트"""

import threading
import time

from mypet.core.locks import PetLockRegistry


class TestPetLockRegistry:
    def test_same_pet_serialized(self):
        locks = PetLockRegistry()
        active = 0
        max_active = 0
        guard = threading.Lock()

        def work():
            nonlocal active, max_active
            with locks.hold("p1"):
                with guard:
                    active += 1
                    max_active = max(max_active, active)
                time.sleep(0.01)
                with guard:
                    active -= 1

        threads = [threading.Thread(target=work) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert max_active == 1

    def test_different_pets_independent(self):
        locks = PetLockRegistry()
        with locks.hold("p1"):
            acquired = threading.Event()

            def other():
                with locks.hold("p2"):
                    acquired.set()

            t = threading.Thread(target=other)
            t.start()
            assert acquired.wait(timeout=1.0)
            t.join()

    def test_released_on_error(self):
        locks = PetLockRegistry()
        try:
            with locks.hold("p1"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        with locks.hold("p1"):
            pass

    def test_entry_dropped_after_release(self):
        locks = PetLockRegistry()
        with locks.hold("p1"):
            assert len(locks) == 1
        assert len(locks) == 0

    def test_entry_dropped_after_error(self):
        locks = PetLockRegistry()
        try:
            with locks.hold("p1"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert len(locks) == 0

    def test_entry_kept_while_waiter_queued(self):
        locks = PetLockRegistry()
        entered = threading.Event()

        def waiter():
            with locks.hold("p1"):
                entered.set()

        with locks.hold("p1"):
            t = threading.Thread(target=waiter)
            t.start()
            time.sleep(0.05)
            assert not entered.is_set()
            assert len(locks) == 1
        t.join(timeout=1.0)
        assert entered.is_set()
        assert len(locks) == 0

    def test_many_ids_do_not_accumulate(self):
        locks = PetLockRegistry()
        for i in range(1000):
            with locks.hold(f"pet-{i}"):
                pass
        assert len(locks) == 0
