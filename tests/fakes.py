"""Fake collaborators shared by the tests."""

from types import SimpleNamespace
from typing import Any, Dict, List, Optional

from recipebox.services.text_generation import TextGenerator

RECIPE_JSON = (
    '{"title": "Tomato Rice", "description": "Simple and bright", "cuisine_type": "Spanish", '
    '"prep_time": "10", "cook_time": 20, "servings": 2, "difficulty": "easy", '
    '"ingredients": [{"name": "rice", "amount": "1", "unit": "cup"}, {"name": "tomato", "amount": "2", "unit": ""}], '
    '"instructions": "Step 1: Rinse rice.\\nStep 2: Simmer with tomato.", "tags": ["quick", "vegan"]}'
)

NUTRITION_JSON = '{"calories": 450, "protein": "25g", "carbs": "30g", "fat": "10g", "fiber": "5g"}'


class FakeTextGenerator(TextGenerator):
    """Records every prompt and answers with `reply` (or raises `error`)."""

    provider = "fake"

    def __init__(self, reply: str = "", error: Optional[Exception] = None):
        super().__init__(model="fake-main", fast_model="fake-fast")
        self.reply = reply
        self.error = error
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    async def generate(self, prompt: str, *, max_tokens: int = 1024, fast: bool = False) -> str:
        self.calls.append({"prompt": prompt, "max_tokens": max_tokens, "fast": fast})
        if self.error is not None:
            raise self.error
        return self.reply

    async def aclose(self) -> None:
        self.closed = True


class FakeQuery:
    """Chainable stand-in for a postgrest request builder."""

    def __init__(self, store: "FakeSupabase", table: str):
        self.store = store
        self.table = table
        self.op: Optional[str] = None
        self.payload: Any = None
        self.filters: List[tuple] = []

    def select(self, columns: str) -> "FakeQuery":
        self.op = "select"
        return self

    def upsert(self, payload: Dict[str, Any]) -> "FakeQuery":
        self.op, self.payload = "upsert", payload
        return self

    def update(self, payload: Dict[str, Any]) -> "FakeQuery":
        self.op, self.payload = "update", payload
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append((column, value))
        return self

    def limit(self, count: int) -> "FakeQuery":
        return self

    def execute(self) -> SimpleNamespace:
        self.store.calls.append((self.table, self.op, self.payload, tuple(self.filters)))
        error = self.store.errors.get((self.table, self.op))
        if error is not None:
            raise error
        if self.op == "select":
            rows = [
                row
                for row in self.store.rows.get(self.table, [])
                if all(row.get(col) == val for col, val in self.filters)
            ]
            return SimpleNamespace(data=rows)
        return SimpleNamespace(data=[self.payload])


class FakeAuth:
    def __init__(self, tokens: Dict[str, str]):
        self.tokens = tokens

    def get_user(self, token: str) -> SimpleNamespace:
        if token not in self.tokens:
            raise RuntimeError("invalid JWT")
        return SimpleNamespace(user=SimpleNamespace(id=self.tokens[token]))


class FakeSupabase:
    """Just enough of `supabase.Client` for the sharing flow."""

    def __init__(self, profiles: Optional[List[Dict[str, Any]]] = None, tokens: Optional[Dict[str, str]] = None):
        self.rows: Dict[str, List[Dict[str, Any]]] = {"profiles": profiles or []}
        self.errors: Dict[tuple, Exception] = {}
        self.calls: List[tuple] = []
        self.auth = FakeAuth(tokens or {"good-token": "user-1"})

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)


