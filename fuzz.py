#!/usr/bin/env python3
"""
Random fuzzer for the HTML minifier.
Generates malformed HTML and checks that minifying never crashes, never hangs,
and that minifying the output a second time changes nothing for input that
tokenizes without parse errors.
"""

import argparse
import random
import string
import sys
import time
import traceback

TAGS = [
    "div", "span", "p", "a", "b", "i", "em", "img", "table", "tr", "td", "ul", "li",
    "form", "input", "button", "select", "option", "textarea", "script", "style",
    "head", "body", "html", "title", "meta", "br", "hr", "h1", "h2", "pre", "code",
    "iframe", "noscript", "xmp", "plaintext", "section", "nav", "label", "x-widget",
]

UNEDITABLE_TAGS = ["pre", "textarea", "script", "style"]
INLINE_TAGS = ["a", "b", "i", "em", "span", "code", "label", "x-widget"]

ATTRIBUTES = [
    "id", "class", "style", "href", "src", "alt", "title", "name", "value", "type",
    "data-x", "hidden", "checked", "disabled",
]

WHITESPACE = [" ", "  ", "\t", "\n", "\r\n", "\f", " ", " \n ", "\n\n\t"]


def random_string(min_len=0, max_len=20):
    """Generate random ASCII string."""
    length = random.randint(min_len, max_len)
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def random_whitespace():
    return "".join(random.choices(WHITESPACE, k=random.randint(0, 4)))


def fuzz_text():
    strategies = [
        lambda: random_string(1, 30),
        lambda: random_whitespace() + random_string(1, 10) + random_whitespace(),
        lambda: random.choice(["&amp;", "&lt;", "&nbsp;", "&", "<", ">", "a < b"]),
        lambda: random_whitespace(),
    ]
    return random.choice(strategies)()


def fuzz_attribute():
    name = random.choice(ATTRIBUTES + [random_string(1, 6), random_string(1, 6).upper()])
    value = random.choice([random_string(0, 15), "a  b", "x&amp;y", "", "1"])
    quote = random.choice(['"', "'", "", None])
    if quote is None:
        return name
    if quote == "" and (not value or " " in value):
        value = "v"
    return f"{name}={quote}{value}{quote}"


def fuzz_open_tag():
    name = random.choice(TAGS + [t.upper() for t in TAGS[:5]])
    attrs = [fuzz_attribute() for _ in range(random.randint(0, 4))]
    if random.random() < 0.2 and attrs:
        attrs.append(attrs[0])  # duplicate
    sep = random.choice([" ", "  ", "\n", "\t"])
    close = random.choice([">", ">", "/>", " />", ""])
    return f"<{name}{sep if attrs else ''}{sep.join(attrs)}{close}"


def fuzz_close_tag():
    name = random.choice(TAGS)
    return random.choice([f"</{name}>", f"</{name.upper()}>", f"</{name} >", "</>", f"</{name}"])


def fuzz_comment():
    strategies = [
        lambda: f"<!--{fuzz_text()}-->",
        lambda: f"<!--[if IE {random.randint(5, 9)}]>{fuzz_text()}<![endif]-->",
        lambda: "<![if !IE]>",
        lambda: "<![endif]>",
        lambda: f"<!--nocache-->{fuzz_text()}<!--/nocache-->",
        lambda: "<!-->",
        lambda: f"<!-- {fuzz_text()} --!>",
        lambda: f"<!--{fuzz_text()}",  # unterminated
        lambda: f"<?{random_string()}?>",
    ]
    return random.choice(strategies)()


def fuzz_doctype():
    return random.choice([
        "<!DOCTYPE html>",
        "<!doctype HTML>",
        '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Strict//EN">',
        "<!DOCTYPE",
    ])


def fuzz_uneditable():
    name = random.choice(UNEDITABLE_TAGS)
    body = random_whitespace() + fuzz_text() + random_whitespace()
    if random.random() < 0.3:
        body += f"<{name}>{fuzz_text()}</{name}>"
    if random.random() < 0.2:
        body += "<!-- not a comment -->"
    end = random.choice([f"</{name}>", f"</{name.upper()}>", ""])
    return f"<{name}>{body}{end}"


def fuzz_inline_run():
    parts = []
    for _ in range(random.randint(1, 5)):
        name = random.choice(INLINE_TAGS)
        parts.append(f"<{name}>{fuzz_text()}</{name}>{random_whitespace()}")
    return "".join(parts)


def fuzz_nested_structure(depth=0, max_depth=6):
    if depth >= max_depth or random.random() < 0.3:
        return fuzz_text()
    name = random.choice(TAGS)
    children = [fuzz_nested_structure(depth + 1, max_depth) for _ in range(random.randint(0, 3))]
    return f"<{name}>{random_whitespace()}{random_whitespace().join(children)}</{name}>{random_whitespace()}"


def generate_fuzzed_html():
    """Generate a random document."""
    generators = [
        fuzz_text,
        fuzz_open_tag,
        fuzz_close_tag,
        fuzz_comment,
        fuzz_uneditable,
        fuzz_inline_run,
        fuzz_nested_structure,
    ]
    parts = []
    if random.random() < 0.5:
        parts.append(random_whitespace() + fuzz_doctype())
    for _ in range(random.randint(1, 15)):
        parts.append(random.choice(generators)())
        if random.random() < 0.5:
            parts.append(random_whitespace())
    return "".join(parts)


OPTION_SETS = [
    {},
    {"optimizationLevel": "ADVANCED"},
    {"comment": False, "deleteDuplicateAttribute": False},
    {"startTagBeforeSlash": "REMOVE_SPACE_ONLY", "excludeComment": [r"<!--/?nocache-->"]},
]


def run_fuzzer(num_tests, seed=None, verbose=False, save_failures=False):
    from htmlminify import HTMLMinify, minify

    if seed is not None:
        random.seed(seed)

    crashes = []
    hangs = []
    unstable = []
    malformed_unstable = 0
    successes = 0

    print(f"Fuzzing htmlminify with {num_tests} test cases...")
    start_time = time.time()

    for i in range(num_tests):
        html = generate_fuzzed_html()
        options = random.choice(OPTION_SETS)

        if verbose and i % 100 == 0:
            print(f"  Test {i}/{num_tests}...")

        try:
            start = time.perf_counter()
            doc = HTMLMinify(html, options, collect_errors=True)
            once = doc.process()
            elapsed = time.perf_counter() - start
            twice = minify(once, options)
        except Exception as e:
            crashes.append({
                "test_num": i,
                "html": html,
                "options": options,
                "error": str(e),
                "traceback": traceback.format_exc(),
            })
            if verbose:
                print(f"  CRASH: Test {i}: {e}")
            continue

        if elapsed > 5.0:
            hangs.append({"test_num": i, "html": html, "options": options, "time": elapsed})
            if verbose:
                print(f"  HANG: Test {i} took {elapsed:.2f}s")
        elif once != twice and doc.errors:
            # Idempotence is only promised for markup that tokenizes cleanly.
            malformed_unstable += 1
        elif once != twice:
            unstable.append({"test_num": i, "html": html, "options": options, "once": once, "twice": twice})
            if verbose:
                print(f"  UNSTABLE: Test {i}")
        else:
            successes += 1

    elapsed_total = time.time() - start_time

    print(f"\n{'=' * 60}")
    print("FUZZING RESULTS: htmlminify")
    print(f"{'=' * 60}")
    print(f"Total tests:    {num_tests}")
    print(f"Successes:      {successes}")
    print(f"Crashes:        {len(crashes)}")
    print(f"Hangs (>5s):    {len(hangs)}")
    print(f"Not idempotent: {len(unstable)}")
    print(f"  (malformed input, not counted: {malformed_unstable})")
    print(f"Total time:     {elapsed_total:.2f}s")
    print(f"Tests/second:   {num_tests / elapsed_total:.1f}")

    if crashes:
        print(f"\n{'=' * 60}")
        print("CRASH DETAILS:")
        print(f"{'=' * 60}")
        for crash in crashes[:10]:
            print(f"\nTest #{crash['test_num']} {crash['options']}:")
            print(f"  HTML: {crash['html'][:200]!r}...")
            print(f"  Error: {crash['error']}")
        if len(crashes) > 10:
            print(f"\n... and {len(crashes) - 10} more crashes")

    if unstable:
        print(f"\n{'=' * 60}")
        print("IDEMPOTENCE FAILURES:")
        print(f"{'=' * 60}")
        for case in unstable[:5]:
            print(f"\nTest #{case['test_num']} {case['options']}:")
            print(f"  HTML:  {case['html'][:200]!r}")
            print(f"  Once:  {case['once'][:200]!r}")
            print(f"  Twice: {case['twice'][:200]!r}")

    if hangs:
        print(f"\n{'=' * 60}")
        print("HANG DETAILS:")
        print(f"{'=' * 60}")
        for hang in hangs[:5]:
            print(f"\nTest #{hang['test_num']} ({hang['time']:.2f}s):")
            print(f"  HTML: {hang['html'][:200]!r}...")

    if save_failures and (crashes or hangs or unstable):
        filename = f"fuzz_failures_htmlminify_{int(time.time())}.txt"
        with open(filename, "w") as f:
            f.write("Fuzzing results for htmlminify\n")
            f.write(f"Seed: {seed}\n\n")
            for crash in crashes:
                f.write(f"=== CRASH #{crash['test_num']} {crash['options']} ===\n")
                f.write(f"HTML:\n{crash['html']}\n")
                f.write(f"Traceback:\n{crash['traceback']}\n\n")
            for case in unstable:
                f.write(f"=== UNSTABLE #{case['test_num']} {case['options']} ===\n")
                f.write(f"HTML:\n{case['html']}\n")
                f.write(f"Once:\n{case['once']}\nTwice:\n{case['twice']}\n\n")
            for hang in hangs:
                f.write(f"=== HANG #{hang['test_num']} ({hang['time']:.2f}s) ===\n")
                f.write(f"HTML:\n{hang['html']}\n\n")
        print(f"\nFailures saved to {filename}")

    return not (crashes or hangs or unstable)


def main():
    parser = argparse.ArgumentParser(description="Fuzz the HTML minifier with malformed input")
    parser.add_argument(
        "--num-tests", "-n",
        type=int,
        default=1000,
        help="Number of test cases to generate (default: 1000)",
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--save-failures",
        action="store_true",
        help="Save failures to a file",
    )
    parser.add_argument(
        "--sample",
        type=int,
        metavar="N",
        help="Just print N sample fuzzed HTML documents (no minifying)",
    )

    args = parser.parse_args()

    if args.sample:
        if args.seed is not None:
            random.seed(args.seed)
        for i in range(args.sample):
            print(f"=== Sample {i + 1} ===")
            print(generate_fuzzed_html())
            print()
        return

    success = run_fuzzer(
        args.num_tests,
        seed=args.seed,
        verbose=args.verbose,
        save_failures=args.save_failures,
    )

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
