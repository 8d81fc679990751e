"""Environments: the chain of lexical scopes bindings are resolved through."""

from sril.lang.error import BindingNotFoundError


class Environment:
    """Maps binding names to Values. A child environment sees all of its ancestors' bindings, but only ever writes to
    its own, so a name bound in a child shadows the parent's binding without changing it.
    """

    def __init__(self, parent=None):
        self.bindings = {}
        self.parent = parent

    def create_child(self):
        return Environment(self)

    def store_binding(self, name, value):
        """Binds name to value locally, replacing any previous local binding."""
        self.bindings[name] = value

    def get_binding_value(self, name):
        """Returns the value of the nearest binding of name, walking outwards from this environment."""
        env = self
        while env is not None:
            if name in env.bindings:
                return env.bindings[name]
            env = env.parent

        raise BindingNotFoundError(name)

    def __contains__(self, name):
        try:
            self.get_binding_value(name)
        except BindingNotFoundError:
            return False
        return True

    def __repr__(self):
        return f"Environment(bindings={self.bindings!r}, parent={self.parent!r})"
