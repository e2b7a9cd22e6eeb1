"""Factory synthesising stub and mock doubles for classes and objects."""

from __future__ import annotations

import dataclasses as dc
import enum
import inspect
import logging
import types
import typing as t

from ._validators import validate_member_name
from .controller import CONTROLLER_ATTR, DoubleController, iter_config
from .errors import ConfigurationError
from .registry import ClassRegistry
from .spy import MISSING, Spy

if t.TYPE_CHECKING:
    from .controller import Config

logger = logging.getLogger(__name__)

#: Configuration key prefix marking a class-level (static) member.
STATIC_MARKER = "::"
#: Reserved method name denoting the constructor.
CONSTRUCTOR = "__init__"

_RESERVED_NAMES = frozenset(
    {
        CONTROLLER_ATTR,
        "__class__",
        "__dict__",
        "__getattribute__",
        "__init_subclass__",
        "__new__",
        "__setattr__",
        "__slots__",
        "__weakref__",
    }
)
# Parent members the interpreter calls implicitly; never intercepted.
_UNWIRED_HOOKS = frozenset(
    {CONSTRUCTOR, "__class_getitem__", "__del__", "__subclasshook__"}
)
# Builtin ``classmethod_descriptor`` (``dict.fromkeys``) binds like classmethod.
_CLASS_LEVEL_DESCRIPTORS = (staticmethod, classmethod, types.ClassMethodDescriptorType)


class Mode(enum.StrEnum):
    """How a double treats members it was not configured with."""

    STUB = "stub"
    MOCK = "mock"


@dc.dataclass(slots=True)
class MemberMap:
    """Configuration entries split by the scope they apply to."""

    class_level: dict[str, t.Any] = dc.field(default_factory=dict)
    instance_level: dict[str, t.Any] = dc.field(default_factory=dict)

    @classmethod
    def parse(cls, config: Config | None) -> MemberMap:
        """Split *config* keys on the static marker and validate them."""
        members = cls()
        for key, value in iter_config(config):
            if not isinstance(key, str):
                msg = f"method names must be strings, got {key!r}"
                raise ConfigurationError(msg)
            static = key.startswith(STATIC_MARKER)
            name = key.removeprefix(STATIC_MARKER)
            _check_member_name(name, static=static)
            target = members.class_level if static else members.instance_level
            target[name] = value
        clash = members.class_level.keys() & members.instance_level.keys()
        if clash:
            names = sorted(clash)
            msg = f"methods configured at both class and instance level: {names}"
            raise ConfigurationError(msg)
        return members


def _check_member_name(name: str, *, static: bool) -> None:
    validate_member_name(name)
    if name in _RESERVED_NAMES:
        msg = f"{name!r} is reserved and cannot be configured"
        raise ConfigurationError(msg)
    if static and name == CONSTRUCTOR:
        msg = f"the constructor must be configured as {CONSTRUCTOR!r}"
        raise ConfigurationError(msg)


def _is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def _is_python_routine(attr: object) -> bool:
    """Return ``True`` for routines written in Python rather than builtins."""
    if isinstance(attr, staticmethod | classmethod):
        attr = attr.__func__
    return isinstance(attr, types.FunctionType)


def parent_routines(parent: type) -> tuple[set[str], set[str]]:
    """Return the ``(class_level, instance_level)`` routines of *parent*.

    Every class in the MRO except :class:`object` contributes, private
    names included. Special methods are only wired when written in Python,
    so builtin protocol slots such as ``dict.__repr__`` keep working.
    """
    names: set[str] = set()
    for klass in parent.__mro__:
        if klass is not object:
            names.update(vars(klass))
    class_level: set[str] = set()
    instance_level: set[str] = set()
    for name in names - _RESERVED_NAMES - _UNWIRED_HOOKS:
        attr = inspect.getattr_static(parent, name)
        if _is_dunder(name) and not _is_python_routine(attr):
            continue
        if isinstance(attr, _CLASS_LEVEL_DESCRIPTORS):
            class_level.add(name)
        elif inspect.isroutine(attr):
            instance_level.add(name)
    return class_level, instance_level


def _class_forwarder(controller: DoubleController, name: str) -> staticmethod:
    def forward(*args: t.Any, **kwargs: t.Any) -> t.Any:
        return controller.dispatch(name, args, kwargs)

    forward.__name__ = forward.__qualname__ = name
    return staticmethod(forward)


def _instance_forwarder(name: str) -> t.Callable[..., t.Any]:
    def forward(self: object, *args: t.Any, **kwargs: t.Any) -> t.Any:
        controller = object.__getattribute__(self, CONTROLLER_ATTR)
        return controller.dispatch(name, args, kwargs)

    forward.__name__ = forward.__qualname__ = name
    return forward


def _stub_repr(self: object) -> str:
    return f"<{type(self).__qualname__} stub>"


@dc.dataclass(slots=True)
class _Blueprint:
    """Everything needed to create one class double and its instances."""

    name: str
    parent: type | None
    mode: Mode
    members: MemberMap
    controller: DoubleController
    cls: type | None = None

    def build(self) -> type:
        bases = (object,) if self.parent is None else (self.parent,)
        cls = types.new_class(self.name, bases, exec_body=self._populate)
        self.cls = cls
        if self.mode is Mode.MOCK and self.parent is not None:
            self.controller.delegate = super(cls, cls)
        return cls

    def _populate(self, namespace: dict[str, t.Any]) -> None:
        class_names, instance_names = self._dispatch_table()
        namespace["__module__"] = __name__
        namespace["__qualname__"] = self.name
        namespace[CONTROLLER_ATTR] = self.controller
        namespace[CONSTRUCTOR] = self._constructor()
        for name in class_names:
            namespace[name] = _class_forwarder(self.controller, name)
        for name in instance_names:
            namespace[name] = _instance_forwarder(name)
        # A class body defining __eq__ alone would reset __hash__ to None.
        if "__eq__" in instance_names and "__hash__" not in namespace:
            namespace["__hash__"] = (self.parent or object).__hash__
        if self.mode is Mode.STUB and "__repr__" not in instance_names:
            namespace["__repr__"] = _stub_repr

    def _dispatch_table(self) -> tuple[set[str], set[str]]:
        """Return every class-level and instance-level name to wire."""
        configured_class = set(self.members.class_level)
        configured_instance = set(self.members.instance_level) - {CONSTRUCTOR}
        if self.parent is None:
            return configured_class, configured_instance
        parent_class, parent_instance = parent_routines(self.parent)
        class_names = configured_class | (parent_class - configured_instance)
        instance_names = configured_instance | (parent_instance - configured_class)
        return class_names, instance_names

    def _constructor(self) -> t.Callable[..., None]:
        blueprint = self

        def __init__(self: object, *args: t.Any, **kwargs: t.Any) -> None:
            blueprint.initialise(self, args, kwargs)

        __init__.__qualname__ = f"{self.name}.{CONSTRUCTOR}"
        return __init__

    def initialise(
        self, instance: object, args: tuple[t.Any, ...], kwargs: dict[str, t.Any]
    ) -> None:
        """Attach a fresh controller to *instance* and run its constructor."""
        index = len(self.controller.instances)
        controller = DoubleController(name=f"{self.name}[{index}]")
        controller.configure(self.members.instance_level)
        if self.controller.passthrough:
            controller.delegate = super(self.cls, instance)
        object.__setattr__(instance, CONTROLLER_ATTR, controller)
        self.controller.register_instance(controller)
        if CONSTRUCTOR in self.members.instance_level or controller.passthrough:
            controller.dispatch(CONSTRUCTOR, args, kwargs)


def _default_name(parent: type | None, mode: Mode) -> str:
    suffix = mode.value.capitalize()
    return suffix if parent is None else f"{parent.__name__}{suffix}"


class DoubleFactory:
    """Build stub and mock doubles wired to :class:`DoubleController` objects.

    Every class double's class-level controller is registered in
    :attr:`registry` under the class name.
    """

    def __init__(self, registry: ClassRegistry | None = None) -> None:
        self.registry = registry if registry is not None else ClassRegistry()

    def build_class(
        self,
        parent: type | None = None,
        config: Config | None = None,
        *,
        mode: Mode | str = Mode.STUB,
        name: str | None = None,
    ) -> type:
        """Return a new class double.

        Parameters
        ----------
        parent:
            Class the double derives from, or ``None``.
        config:
            Mapping of method name to default return value, or an iterable
            of names returning ``None``. Names prefixed with ``"::"`` are
            class-level; ``"__init__"`` records constructor calls.
        mode:
            :attr:`Mode.STUB` rejects unconfigured parent methods;
            :attr:`Mode.MOCK` forwards them to the parent implementation.
        name:
            Class name and registry key. Defaults to the parent name
            followed by ``Stub`` or ``Mock``.
        """
        mode = Mode(mode)
        if parent is not None and not isinstance(parent, type):
            msg = f"parent must be a class or None, got {parent!r}"
            raise TypeError(msg)
        members = MemberMap.parse(config)
        class_name = name or _default_name(parent, mode)
        controller = DoubleController(name=class_name)
        controller.configure(members.class_level)
        blueprint = _Blueprint(class_name, parent, mode, members, controller)
        cls = blueprint.build()
        self.registry.register(class_name, controller)
        logger.debug(
            "Built %s class double %r (parent=%s, class methods=%s, methods=%s)",
            mode,
            class_name,
            None if parent is None else parent.__qualname__,
            sorted(members.class_level),
            sorted(members.instance_level),
        )
        return cls

    def build_instance(
        self,
        parent: type | None = None,
        config: Config | None = None,
        *,
        mode: Mode | str = Mode.STUB,
        name: str | None = None,
        args: t.Sequence[t.Any] = (),
        kwargs: t.Mapping[str, t.Any] | None = None,
    ) -> t.Any:
        """Build a class double and return an instance constructed with *args*."""
        cls = self.build_class(parent, config, mode=mode, name=name)
        return cls(*args, **(kwargs or {}))

    # ------------------------------------------------------------------
    # Shorthands
    # ------------------------------------------------------------------
    def stub(
        self,
        parent: type | None = None,
        config: Config | None = None,
        /,
        *args: t.Any,
        **kwargs: t.Any,
    ) -> t.Any:
        """Return a stub instance; extra arguments go to its constructor."""
        return self.build_instance(parent, config, args=args, kwargs=kwargs)

    def stub_class(
        self,
        parent: type | None = None,
        config: Config | None = None,
        *,
        name: str | None = None,
    ) -> type:
        """Return a stub class."""
        return self.build_class(parent, config, name=name)

    def mock(
        self,
        parent: type | None = None,
        config: Config | None = None,
        /,
        *args: t.Any,
        **kwargs: t.Any,
    ) -> t.Any:
        """Return a mock instance; extra arguments go to its constructor."""
        return self.build_instance(
            parent, config, mode=Mode.MOCK, args=args, kwargs=kwargs
        )

    def mock_class(
        self,
        parent: type | None = None,
        config: Config | None = None,
        *,
        name: str | None = None,
    ) -> type:
        """Return a mock class."""
        return self.build_class(parent, config, mode=Mode.MOCK, name=name)

    def spy(self, default: t.Any = MISSING) -> Spy:
        """Return a callable spy answering *default* when given."""
        return Spy(default)
