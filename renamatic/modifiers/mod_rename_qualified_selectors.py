from renamatic import code_dom
from renamatic import utils


# Visitor that renames the member in every "<qualifier>.Member" access found in the mapping
# The qualifier can be anywhere at the root of the receiver chain, so std.PrevRealm().Addr() has both PrevRealm and
# Addr renamed
class QualifiedSelectorRenamer:
    def __init__(self, name_map, qualifier="std"):
        self.name_map = name_map
        self.qualifier = qualifier
        self.rename_count = 0

    # Called for every element in the tree, always continuing into children
    def visit(self, element):
        if element.kind == code_dom.NodeKind.selector_expression and utils.is_qualified(element.x, self.qualifier):
            new_name = self.name_map.get(element.selector.name)
            if new_name is not None:
                element.selector.name = new_name
                self.rename_count += 1
        return True


# This modifier renames members accessed through a package qualifier (by default std)
# Takes a map mapping old member names to new names, and returns the number of renames made
def apply(dom_root, name_map, qualifier="std"):
    renamer = QualifiedSelectorRenamer(name_map, qualifier)
    dom_root.inspect(renamer.visit)
    return renamer.rename_count
