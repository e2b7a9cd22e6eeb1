"""pytest-bdd steps that build stub and mock doubles and call them."""

from __future__ import annotations

from pytest_bdd import given, parsers, when

from moka.factory import DoubleFactory
from tests.helpers.doubles import DoubleContext
from tests.helpers.parents import Greeter


@given("a moka factory", target_fixture="context")
def create_context() -> DoubleContext:
    """Create a context holding a factory with a private registry."""
    return DoubleContext(factory=DoubleFactory())


@given(parsers.cfparse('a stub with method "{method}" returning "{value}"'))
def stub_with_method(context: DoubleContext, method: str, value: str) -> None:
    """Build a parentless stub answering *method*."""
    context.double = context.factory.stub(None, {method: value})


@given(parsers.cfparse('a stub with bare method "{method}"'))
def stub_with_bare_method(context: DoubleContext, method: str) -> None:
    """Build a parentless stub whose *method* returns ``None``."""
    context.double = context.factory.stub(None, [method])


@given(parsers.cfparse('a stub of Greeter with method "{method}" returning "{value}"'))
def stub_of_greeter(context: DoubleContext, method: str, value: str) -> None:
    """Build a stub deriving from :class:`Greeter`."""
    context.double = context.factory.stub(Greeter, {method: value})


@given(parsers.cfparse('a mock of Greeter with method "{method}" returning "{value}"'))
def mock_of_greeter(context: DoubleContext, method: str, value: str) -> None:
    """Build a mock deriving from :class:`Greeter`."""
    context.double = context.factory.mock(Greeter, {method: value})


@given(
    parsers.cfparse('a stub class with class method "{method}" returning "{value}"')
)
def stub_class_with_static(context: DoubleContext, method: str, value: str) -> None:
    """Build a stub class answering the class-level *method*."""
    context.double = context.factory.stub_class(
        None, {f"::{method}": value}, name="Service"
    )


@given(parsers.cfparse('a stub class with method "{method}" returning "{value}"'))
def stub_class_with_method(context: DoubleContext, method: str, value: str) -> None:
    """Build a stub class whose instances answer *method*."""
    context.double = context.factory.stub_class(None, {method: value})


@given("a stub class of Greeter recording its constructor")
def stub_class_with_constructor(context: DoubleContext) -> None:
    """Build a stub class of :class:`Greeter` recording constructor calls."""
    context.double = context.factory.stub_class(Greeter, ["__init__"])


@given(
    parsers.cfparse(
        'a mock class of Greeter with method "{method}" returning "{value}"'
    )
)
def mock_class_of_greeter(context: DoubleContext, method: str, value: str) -> None:
    """Build a mock class of :class:`Greeter`."""
    context.double = context.factory.mock_class(Greeter, {method: value})


@when(parsers.cfparse('I call "{method}" without arguments'))
def call_without_arguments(context: DoubleContext, method: str) -> None:
    """Call *method* on the double with no arguments."""
    context.invoke(context.double, method)


@when(parsers.cfparse('I call "{method}" with "{arg}"'))
def call_with_argument(context: DoubleContext, method: str, arg: str) -> None:
    """Call *method* on the double with one argument."""
    context.invoke(context.double, method, arg)


@when(parsers.cfparse('I call "{method}" with the arguments "{first}" and "{second}"'))
def call_with_two_arguments(
    context: DoubleContext, method: str, first: str, second: str
) -> None:
    """Call *method* on the double with two arguments."""
    context.invoke(context.double, method, first, second)


@when(parsers.cfparse('I construct an instance with "{arg}"'))
def construct_instance(context: DoubleContext, arg: str) -> None:
    """Instantiate the class double with one constructor argument."""
    context.instance = context.double(arg)


@when(parsers.cfparse('I call "{method}" on the instance passing "{arg}"'))
def call_instance(context: DoubleContext, method: str, arg: str) -> None:
    """Call *method* on the last constructed instance."""
    context.invoke(context.instance, method, arg)
