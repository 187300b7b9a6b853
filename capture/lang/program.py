"""The entry program and the driver that runs it. Written out in source form, the program is

```
var globalSet;
var globalGet;

fun main() {
  var a = "initial";

  fun set() { a = "updated"; }
  fun get() { print a; }

  globalSet = set;
  globalGet = get;
}

main();
```

after which the driver calls the closures stored in globalSet and globalGet.
"""

from capture.lang.statements import Assign, Call, Expression, Function, Literal, Name, Print, Var

SLOTS = ("globalSet", "globalGet")


def main_function(initial="initial", updated="updated"):
    """Returns the declaration of main, which captures its local a in both set and get."""
    return Function("main", body=[
        Var("a", Literal(initial)),
        Function("set", body=[Assign("a", Literal(updated))]),
        Function("get", body=[Print(Name("a"))]),
        Assign(SLOTS[0], Name("set")),
        Assign(SLOTS[1], Name("get")),
    ])


def entry_program(initial="initial", updated="updated"):
    """Returns the statements that declare the slots and main, then call main once."""
    return [
        Var(SLOTS[0]),
        Var(SLOTS[1]),
        main_function(initial, updated),
        Expression(Call("main")),
    ]


def drive(session, calls=SLOTS):
    """Runs the entry program in session, filling the slots of session.globals, then invokes the closures stored in
    the slots named by calls, in order. Returns their results.
    """
    session.add(*entry_program())
    session.run()

    return [session.evaluate(Call(slot)) for slot in calls]
