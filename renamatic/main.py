# Renamatic
# Renames members of the Gno std package (and other package qualifiers) across a tree of .gno files

# Example command-line:
#   renamatic --mapping mapping.yml --dir ./realms
#   renamatic --mapping mapping.yml --dir ./realms --dry-run

# Example mapping file:
#   GetCallerAt: CallerAt
#   PrevRealm: PreviousRealm

import argparse
import sys
import traceback
from renamatic import mapping
from renamatic import processor
from renamatic.errors import RenamaticError


def main(argv=None):
    print("Renamatic: rename std package members in Gno source files.")

    parser = argparse.ArgumentParser(
                        prog='renamatic',
                        add_help=True,
                        epilog='Result code 0 is returned on success, 1 on processing failure and 2 on '
                               'parameter errors')
    parser.add_argument('--mapping',
                        default='mapping.yml',
                        help='Path to YAML file with member name mappings (default: mapping.yml)')
    parser.add_argument('--dir',
                        default='.',
                        help='Directory to traverse (default: current directory)')
    parser.add_argument('--qualifier',
                        default=processor.DEFAULT_QUALIFIER,
                        help='Package identifier whose members are renamed (default: ' +
                             processor.DEFAULT_QUALIFIER + ')')
    parser.add_argument('--extension',
                        default=processor.DEFAULT_EXTENSION_PREFIX,
                        help='Process files whose extension starts with this (default: ' +
                             processor.DEFAULT_EXTENSION_PREFIX + ')')
    parser.add_argument('--dry-run',
                        action='store_true',
                        help='Report the files that would change without writing them')

    args = parser.parse_args(argv)

    try:
        print("Loading mapping from " + args.mapping)
        name_map = mapping.load_mapping(args.mapping)

        print("Processing " + args.dir)
        changed_files = processor.process_dir(args.dir, name_map, args.qualifier, args.extension, args.dry_run)
    except RenamaticError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)
    except Exception:  # noqa - anything else is a bug, so show where it came from
        print("Exception during processing:", file=sys.stderr)
        traceback.print_exc()
        sys.exit(1)

    if args.dry_run:
        print(str(len(changed_files)) + " file(s) would be changed")
    else:
        print(str(len(changed_files)) + " file(s) changed")
    print("Done")
    sys.exit(0)


if __name__ == '__main__':
    main()
