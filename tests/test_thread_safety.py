"""Tests for thread safety of Registry."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

from diregistry.lock_mode import LockMode
from diregistry.registry import Registry
from tests.sample_types import ConcreteTypeOne, RootType


class SlowRootType(RootType):
    created = 0
    created_lock = threading.Lock()

    def __init__(self) -> None:
        with type(self).created_lock:
            type(self).created += 1
        time.sleep(0.01)

    def final_value(self) -> int:
        return 0

    def change_value(self, new_value: int) -> None:
        pass


class TestConcurrentResolution:
    def test_concurrent_singleton_resolution_same_instance(self, registry: Registry) -> None:
        """Thread-locked singletons construct once and share one instance."""
        SlowRootType.created = 0
        registry.register(RootType, SlowRootType).as_singleton()
        barrier = threading.Barrier(10)
        results: list[RootType] = []
        errors: list[Exception] = []

        def resolve_service() -> None:
            try:
                barrier.wait()
                results.append(registry.resolve(RootType))
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=resolve_service) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        assert len(results) == 10
        assert all(r is results[0] for r in results)
        assert SlowRootType.created == 1

    def test_per_registration_lock_mode_overrides_registry_default(self) -> None:
        SlowRootType.created = 0
        registry = Registry(lock_mode=LockMode.NONE)
        registry.register(RootType, SlowRootType).as_singleton(lock_mode=LockMode.THREAD)

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda _: registry.resolve(RootType), range(8)))

        assert all(r is results[0] for r in results)
        assert SlowRootType.created == 1

    def test_unlocked_singleton_settles_on_one_instance(self, registry_unlocked: Registry) -> None:
        """Best-effort singletons may build more than once but stay cached afterwards."""
        registry_unlocked.register(RootType, SlowRootType).as_singleton()

        with ThreadPoolExecutor(max_workers=8) as executor:
            list(executor.map(lambda _: registry_unlocked.resolve(RootType), range(8)))

        cached = registry_unlocked.resolve(RootType)

        assert registry_unlocked.resolve(RootType) is cached
        assert isinstance(cached, SlowRootType)

    def test_concurrent_transient_resolution_different_instances(
        self,
        registry: Registry,
    ) -> None:
        registry.register(RootType, ConcreteTypeOne)

        with ThreadPoolExecutor(max_workers=10) as executor:
            results = list(executor.map(lambda _: registry.resolve(RootType), range(10)))

        assert len({id(r) for r in results}) == 10


class TestConcurrentRegistration:
    def test_concurrent_registration_no_corruption(self, registry: Registry) -> None:
        errors: list[Exception] = []

        def register_service(i: int) -> None:
            try:
                registry.register(RootType, ConcreteTypeOne, f"service-{i}")
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=register_service, args=(i,)) for i in range(50)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        for i in range(50):
            assert isinstance(registry.resolve_by_name(f"service-{i}"), ConcreteTypeOne)
        assert isinstance(registry.resolve(RootType), ConcreteTypeOne)

    def test_concurrent_registration_and_resolution(self, registry: Registry) -> None:
        results: list[object] = []
        errors: list[Exception] = []

        def register_and_resolve(i: int) -> None:
            try:
                registry.register(RootType, ConcreteTypeOne, f"local-{i}")
                results.append(registry.resolve_by_name(f"local-{i}"))
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=register_and_resolve, args=(i,)) for i in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        assert len(results) == 10
