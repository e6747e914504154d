# (C) 2024 Irreducible Inc.

import functools
import pathlib
import types
from typing import Callable, Iterable

import pytest


def pytest_pycollect_makemodule(module_path: pathlib.Path, parent) -> pytest.Module:
    """
    Collects a test module and expands its @pytest.mark.parametrize_hypothesis tests.

    Args:
        module_path (pathlib.Path): path of the collected test module.
        parent: the collector the module belongs to.

    Returns:
        pytest.Module: Created module.
    """
    mod: pytest.Module = pytest.Module.from_parent(parent, path=module_path)
    expand_parametrize_hypothesis(mod)
    return mod


def expand_parametrize_hypothesis(mod: pytest.Module) -> None:
    """
    Replaces every test marked with @pytest.mark.parametrize_hypothesis(name=[decorators...], ...) by one copy per
    keyword. The copy for `name` is called `<test>_<name>`, carries @pytest.mark.<name> and is wrapped in the given
    hypothesis decorators, so `pytest -m fast` runs the cheap settings and `pytest -m slow` the thorough ones.

    Args:
        mod (pytest.Module): pytest module
    """
    marked: dict[str, Callable] = {
        name: obj
        for name, obj in getattr(mod.obj, "__dict__", {}).items()
        if callable(obj) and any(mark.name == "parametrize_hypothesis" for mark in getattr(obj, "pytestmark", []))
    }

    for test_func_name, test_func in marked.items():
        delattr(mod.obj, test_func_name)
        mark: pytest.Mark = next(m for m in test_func.pytestmark if m.name == "parametrize_hypothesis")
        if mark.args:
            raise ValueError(
                f"@pytest.mark.parametrize_hypothesis for '{mod.name}.{test_func_name}' only takes keyword arguments"
            )

        for mark_name, decorators in mark.kwargs.items():
            if not isinstance(decorators, (list, tuple, set)) or not all(callable(d) for d in decorators):
                raise ValueError(
                    f"@pytest.mark.parametrize_hypothesis for '{mod.name}.{test_func_name}' expects a list of "
                    + f"decorators for {mark_name}, got: {decorators}"
                )
            variant_name = f"{test_func_name}_{mark_name}"
            variant = copy_test_func(test_func, variant_name, decorators)
            setattr(mod.obj, variant_name, getattr(pytest.mark, mark_name)(variant))


def copy_test_func(test_func: Callable, new_name: str, decorators: Iterable[Callable]) -> Callable:
    """
    Copies a test function under a new name and wraps it in the given decorators.

    Args:
        test_func (Callable): The original test function to be copied.
        new_name (str): The name for the new function
        decorators (Iterable[Callable]): decorators to apply to the copy, innermost first

    Returns:
        Callable: The new test function.
    """
    new_test_func: Callable = types.FunctionType(
        code=test_func.__code__,
        globals=test_func.__globals__,
        name=new_name,
        argdefs=test_func.__defaults__,
        closure=test_func.__closure__,
    )
    new_test_func = functools.update_wrapper(new_test_func, test_func)
    for decorator in decorators:
        new_test_func = decorator(new_test_func)
    return new_test_func
