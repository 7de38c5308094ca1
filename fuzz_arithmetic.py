import random
import string

from linecalc.environment import Environment
from linecalc.runtime import evaluate
from linecalc.value import Value

if __name__ == "__main__":
    alphabet = string.digits + ".()+-*/^%= xe"

    def generate(length: int) -> str:
        return "".join(random.choices(alphabet, k=length))

    env = Environment()
    checked = 0
    while True:
        code = generate(random.randint(1, 16))
        try:
            res = evaluate(env, code)
        except Exception as e:
            print(f"{code!r}\nraised: {e!r}\n\n")
            continue
        if not isinstance(res, Value):
            print(f"{code!r}\nreturned non-value: {res!r}\n\n")
        checked += 1
        if checked % 100_000 == 0:
            print(f"{checked} inputs checked")
