import errno
import os
import stat
from renamatic import utils
from renamatic.errors import RenamaticError, ParseError, TraversalError, WriteError
from renamatic.modifiers import mod_rename_qualified_selectors

DEFAULT_QUALIFIER = "std"
DEFAULT_EXTENSION_PREFIX = ".gno"


# Parse the raw bytes of a source file into a DOM
def parse(source, source_filename=None):
    try:
        text = source.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseError("source is not valid UTF-8 (" + e.reason + " at byte " + str(e.start) + ")",
                         path=source_filename) from e

    try:
        return utils.parse_source(text, source_filename)
    except ParseError as e:
        if source_filename is not None and e.path is None:
            raise e.with_path(source_filename) from e
        raise


# Turn a DOM back into the bytes to write out
# Raises SerializeError if a renamed identifier cannot be written
def serialize(dom_root):
    return dom_root.to_gno_string().encode("utf-8")


# Apply the renames in mapping to a piece of Gno source text, returning the new text
def rename_source(text, mapping, qualifier=DEFAULT_QUALIFIER):
    dom_root = utils.parse_source(text)
    mod_rename_qualified_selectors.apply(dom_root, mapping, qualifier)
    return dom_root.to_gno_string()


# Rewrites single Gno files in place
class GnoFileProcessor:
    def __init__(self, mapping, qualifier=DEFAULT_QUALIFIER, extension_prefix=DEFAULT_EXTENSION_PREFIX,
                 dry_run=False):
        self.mapping = mapping
        self.qualifier = qualifier
        self.extension_prefix = extension_prefix
        self.dry_run = dry_run  # If set, work out what would change but don't write anything

    # Should the file at path be processed?
    # Any extension starting with the prefix counts, so with the default both foo.gno and foo.gnoA are processed
    def should_process(self, path):
        extension = os.path.splitext(path)[1]
        return extension.startswith(self.extension_prefix)

    # Rename everything in the mapping in the file at path, writing it back if anything changed
    # Returns True if the file content changed
    def process_file(self, path):
        with open(path, "rb") as f:
            source = f.read()

        dom_root = parse(source, path)
        rename_count = mod_rename_qualified_selectors.apply(dom_root, self.mapping, self.qualifier)
        output = serialize(dom_root)

        if output == source:
            return False

        if self.dry_run:
            print("Would rewrite " + path + " (" + str(rename_count) + " renamed)")
        else:
            self.write_file(path, output)
            print("Rewrote " + path + " (" + str(rename_count) + " renamed)")
        return True

    # Write data to path, keeping the existing permission bits
    def write_file(self, path, data):
        try:
            mode = stat.S_IMODE(os.stat(path).st_mode)
            with open(path, "wb") as f:
                f.write(data)
            os.chmod(path, mode)
        except OSError as e:
            raise WriteError(path, e.strerror or str(e)) from e


# Runs a file processor over every matching file in a directory tree
class DirectoryProcessor:
    def __init__(self, processor):
        self.processor = processor

    # Process every matching file under root, in lexical order
    # Stops at the first failure, raising TraversalError with the path concerned
    # Returns the list of files that were changed
    def process_dir(self, root):
        changed_files = []
        if os.path.isdir(root):
            self.process_entries(root, changed_files)
        elif os.path.exists(root):
            # A plain file given as the root is processed on its own if it matches
            self.process_entry(root, changed_files)
        else:
            raise TraversalError(root, FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), root))
        return changed_files

    def process_entries(self, dir_path, changed_files):
        try:
            names = sorted(os.listdir(dir_path))
        except OSError as e:
            raise TraversalError(dir_path, e) from e

        for name in names:
            path = os.path.join(dir_path, name)
            # Symlinked directories are not followed
            if os.path.isdir(path) and not os.path.islink(path):
                self.process_entries(path, changed_files)
            else:
                self.process_entry(path, changed_files)

    def process_entry(self, path, changed_files):
        if not self.processor.should_process(path):
            return
        try:
            if self.processor.process_file(path):
                changed_files.append(path)
        except (RenamaticError, OSError) as e:
            raise TraversalError(path, e) from e


# Process every matching file under dir with the mapping given, returning the list of changed files
def process_dir(dir, mapping, qualifier=DEFAULT_QUALIFIER, extension_prefix=DEFAULT_EXTENSION_PREFIX,
                dry_run=False):
    file_processor = GnoFileProcessor(mapping, qualifier, extension_prefix, dry_run)
    return DirectoryProcessor(file_processor).process_dir(dir)
