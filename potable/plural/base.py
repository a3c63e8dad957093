from abc import ABC, abstractmethod


class PluralRules(ABC):
    """
    A source of plural rules.

    A rule source resolves an opaque descriptor (a locale name, a
    `Plural-Forms` header, ...) into a state once, through ``init``. The
    state is then queried for the number of plural forms and for the form a
    given count belongs to.

    ``form_index`` must be total: for every non-negative count it returns a
    value in ``[0, form_count(state))``.
    """

    def init(self, descriptor):
        return descriptor

    @abstractmethod
    def form_count(self, state) -> int:
        pass

    @abstractmethod
    def form_index(self, state, count: int) -> int:
        pass
