from __future__ import annotations

import importlib.util
import unittest


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


class Receiver:
    label = "not a method"

    def __init__(self) -> None:
        self.calls: list[tuple[object, ...]] = []

    def __str__(self) -> str:
        return "rcvr!"

    def string(self) -> str:
        return str(self)

    def add(self, a, b):
        self.calls.append((a, b))
        return a + b

    def split(self, text: str):
        head, _, tail = text.partition(" ")
        return head, tail

    def collect(self, items: list[int]) -> int:
        return len(items)

    def explode(self, key):
        return {}[key]

    def _hidden(self) -> str:
        return "hidden"


def _object_system():
    """Class/superclass method tables with instance variables laid out root ancestor first."""
    from latebind import Finder, MessageReceiver, apply, does_not_understand, prepend_arg

    class Klass:
        def __init__(self, superclass, methods, instance_vars) -> None:
            self.superclass = superclass
            self.methods = methods
            self.instance_vars = instance_vars

        def lookup_method(self, selector):
            method = self.methods.get(selector)
            if method is not None:
                return method
            if self.superclass is None:
                return None
            return self.superclass.lookup_method(selector)

        def instance_var_names(self) -> list[str]:
            inherited = [] if self.superclass is None else self.superclass.instance_var_names()
            return inherited + list(self.instance_vars)

        def new(self, *data):
            ivars = [None] * len(self.instance_var_names())
            ivars[: len(data)] = data
            return Instance(self, ivars)

    class Instance(MessageReceiver, Finder):
        def __init__(self, klass, data) -> None:
            self.klass = klass
            self.data = data

        def receive(self, selector, *args):
            method = self.klass.lookup_method(selector)
            if method is None:
                raise does_not_understand(self, *prepend_arg(selector, *args))
            return apply(method, *prepend_arg(self, *args))

        def find(self, name):
            names = self.klass.instance_var_names()
            if name not in names:
                return None, False
            return self.data[names.index(name)], True

    return Klass


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for messaging tests")
class MessagingTests(unittest.TestCase):
    def test_send_calls_named_method(self) -> None:
        from latebind import send

        self.assertEqual(send(Receiver(), "string"), "rcvr!")

    def test_send_passes_remaining_message_as_arguments(self) -> None:
        from latebind import send

        receiver = Receiver()
        self.assertEqual(send(receiver, "add", 1, 2), 3)
        self.assertEqual(receiver.calls, [(1, 2)])

    def test_send_normalizes_like_apply(self) -> None:
        from latebind import ResultTuple, send

        out = send(Receiver(), "split", "hello world")
        self.assertIsInstance(out, ResultTuple)
        self.assertEqual(tuple(out), ("hello", "world"))
        self.assertEqual(send(Receiver(), "collect", None), 0)

    def test_unknown_message_raises_does_not_understand(self) -> None:
        from latebind import ContractViolation, DoesNotUnderstand, LateBindError, send

        receiver = Receiver()
        with self.assertRaises(DoesNotUnderstand) as ctx:
            send(receiver, "missing", 1, "two")

        err = ctx.exception
        self.assertIs(err.receiver, receiver)
        self.assertEqual(err.message, ("missing", 1, "two"))
        self.assertEqual(err.selector, "missing")
        self.assertIsInstance(err, LateBindError)
        self.assertNotIsInstance(err, ContractViolation)
        self.assertIn("does not understand", str(err))

    def test_private_and_non_callable_attributes_are_not_understood(self) -> None:
        from latebind import DoesNotUnderstand, send

        for selector in ("_hidden", "__str__", "label", "calls"):
            with self.subTest(selector=selector):
                with self.assertRaises(DoesNotUnderstand):
                    send(Receiver(), selector)

    def test_private_names_resolve_when_enabled(self) -> None:
        from unittest import mock

        from latebind import DoesNotUnderstand, responds_to, send

        with mock.patch("latebind.messaging._RESOLVE_PRIVATE", True):
            self.assertEqual(send(Receiver(), "_hidden"), "hidden")
            self.assertTrue(responds_to(Receiver(), "_hidden"))
            with self.assertRaises(DoesNotUnderstand):
                send(Receiver(), "label")
        self.assertFalse(responds_to(Receiver(), "_hidden"))

    def test_does_not_understand_survives_context_managers(self) -> None:
        import contextlib

        from latebind import DoesNotUnderstand, send

        @contextlib.contextmanager
        def boundary():
            yield

        with self.assertRaises(DoesNotUnderstand) as ctx:
            with boundary():
                send(object(), "fly")
        self.assertEqual(ctx.exception.message, ("fly",))

    def test_selector_must_be_a_name(self) -> None:
        from latebind import SelectorError, send

        with self.assertRaises(SelectorError):
            send(Receiver(), 3)

    def test_message_receiver_gets_whole_message(self) -> None:
        from latebind import MessageReceiver, send

        class Recorder(MessageReceiver):
            def __init__(self) -> None:
                self.messages: list[tuple[object, ...]] = []

            def receive(self, selector, *args):
                self.messages.append((selector, *args))
                return len(self.messages)

        recorder = Recorder()
        self.assertEqual(send(recorder, "anything", 1, 2), 1)
        self.assertEqual(send(recorder, 42), 2)
        self.assertEqual(recorder.messages, [("anything", 1, 2), (42,)])

    def test_responds_to(self) -> None:
        from latebind import MessageReceiver, responds_to

        class Anything(MessageReceiver):
            def receive(self, selector, *args):
                return None

        self.assertTrue(responds_to(Receiver(), "add"))
        self.assertFalse(responds_to(Receiver(), "missing"))
        self.assertFalse(responds_to(Receiver(), "label"))
        self.assertTrue(responds_to(Anything(), "missing"))

    def test_send_with_errors_classifies_method_failures(self) -> None:
        from latebind import DoesNotUnderstand, SelectorError, send_with_errors

        with self.assertRaises(SelectorError) as ctx:
            send_with_errors(Receiver(), "explode", "k")
        self.assertIsInstance(ctx.exception.__cause__, KeyError)

        with self.assertRaises(DoesNotUnderstand):
            send_with_errors(Receiver(), "missing")

    def test_object_system_resolves_through_superclass_chain(self) -> None:
        from latebind import at, send

        Klass = _object_system()
        foo_class = Klass(
            None,
            {
                "string": lambda self: at(self, "a"),
                "other": lambda self: send(self, "string"),
            },
            ["a"],
        )
        bar_class = Klass(
            foo_class,
            {
                "string": lambda self: at(self, "b"),
            },
            ["b"],
        )

        foo = foo_class.new("foo")
        self.assertEqual(send(foo, "other"), "foo")

        bar = bar_class.new("bar", "quux")
        self.assertEqual(send(bar, "other"), "quux")
        self.assertEqual(at(bar, "a"), "bar")

    def test_object_system_methods_receive_self_first(self) -> None:
        from latebind import at, send

        Klass = _object_system()
        counter_class = Klass(None, {"plus": lambda self, n: at(self, "count") + n}, ["count"])
        self.assertEqual(send(counter_class.new(40), "plus", 2), 42)

    def test_object_system_reports_unknown_messages(self) -> None:
        from latebind import DoesNotUnderstand, send

        Klass = _object_system()
        instance = Klass(None, {}, []).new()
        with self.assertRaises(DoesNotUnderstand) as ctx:
            send(instance, "fly", 1)
        self.assertIs(ctx.exception.receiver, instance)
        self.assertEqual(ctx.exception.message, ("fly", 1))


if __name__ == "__main__":
    unittest.main()
