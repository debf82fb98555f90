"""
Entry point for running as a module: python -m dictionary_generator

Usage:
    python -m dictionary_generator                              # testWordList.txt -> dict.csv
    python -m dictionary_generator WORDS [DICTIONARY [LOG]]     # Custom paths
    python -m dictionary_generator --lookup WORD                # Look up a single word
    python -m dictionary_generator --status                     # Show today's API quota
    python -m dictionary_generator --serve                      # Run web app
"""

import sys


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)

    if '--help' in args or '-h' in args:
        print(__doc__)
        return 0

    if '--serve' in args:
        from .app import main as app_main
        app_main()
        return 0

    from .config import MERRIAM_WEBSTER_COLLEGIATE_KEY
    from .fetchers.quota import SettingsStore
    from .generators.dictionary_generator import (
        DictionaryGenerator, DictionaryLookupError, create_dictionary
    )

    generator = DictionaryGenerator(store=SettingsStore())

    if '--status' in args:
        status = generator.get_status()
        print(f"API calls made today: {status['calls_made_today']} / {status['daily_limit']}")
        print(f"Remaining today:      {status['remaining_today']}")
        print(f"Last access:          {status['last_access'] or 'never'}")
        print(f"Resets at:            {status['reset_time']}")
        return 0

    if not MERRIAM_WEBSTER_COLLEGIATE_KEY:
        print("⚠ MW Collegiate API key not configured. Set MW_COLLEGIATE_API_KEY.")
        return 1

    if '--lookup' in args:
        i = args.index('--lookup')
        if i + 1 >= len(args):
            print("--lookup needs a word")
            return 2
        try:
            print(generator.get_dictionary_entry(args[i + 1]))
        except DictionaryLookupError as e:
            print(f"✗ {e}")
            return 1
        return 0

    paths = [a for a in args if not a.startswith('-')]
    summary = create_dictionary(*paths[:3], generator=generator)

    print()
    print(f"Entries added: {summary.entries_added}")
    print(f"Errors:        {summary.errors}")
    if summary.quota_exhausted:
        print(f"Words left for tomorrow: {summary.remaining} (see {generator.resume_path})")

    return 1 if summary.aborted else 0


if __name__ == '__main__':
    sys.exit(main())
