from types import SimpleNamespace


class FakeQuery:
    """
    Stand-in for the Supabase query builder.

    Records every chained call so tests can assert on the query that
    would have been sent, and returns the canned rows on execute().
    """

    def __init__(self, table, rows, error=None):
        self.table = table
        self.rows = rows
        self.error = error
        self.calls = []

    def __getattr__(self, name):
        def method(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self
        return method

    def execute(self):
        if self.error is not None:
            raise self.error
        return SimpleNamespace(data=self.rows)


class FakeSupabaseClient:
    def __init__(self, rows=None, error=None):
        self.rows = rows if rows is not None else []
        self.error = error
        self.queries = []

    def table(self, name):
        query = FakeQuery(name, self.rows, self.error)
        self.queries.append(query)
        return query

    @property
    def last_query(self):
        return self.queries[-1]
