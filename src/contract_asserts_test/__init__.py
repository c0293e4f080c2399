from contract_asserts_test.contextmanagers import RevertsContextManager, reverts

__all__ = ["RevertsContextManager", "reverts"]
