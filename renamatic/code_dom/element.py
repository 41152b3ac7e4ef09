from .common import *


# Wrap an optional child element as a child list
def optional_child(element):
    if element is None:
        return []
    return [element]


# The base class for all DOM elements
class DOMElement:
    kind = NodeKind.unknown

    def __init__(self):
        self.tokens = []  # Tokens that make up this element directly (only leaf elements record these)
        self.parent = None  # The parent element
        self.pre_comments = []  # Doc comments immediately preceding this element

    # Returns a list of all the lists in this element that contain children, in source order
    # Subclasses extend this with their own children
    def get_child_lists(self):
        return [self.pre_comments]

    # Returns all the direct children of this element, in source order
    def get_children(self):
        children = []
        for child_list in self.get_child_lists():
            children.extend(child_list)
        return children

    # Set the parent of every element below this one
    # This and the walkers below are iterative, as long operator chains nest deeper than the recursion limit
    def link_children(self):
        pending = [self]
        while len(pending) > 0:
            element = pending.pop()
            for child in element.get_children():
                child.parent = element
                pending.append(child)

    # Debug function - raises exception if the hierarchy is not valid
    def validate_hierarchy(self):
        pending = [self]
        while len(pending) > 0:
            element = pending.pop()
            for child in element.get_children():
                if child.parent is not element:
                    raise Exception("Node " + str(child) + " has parent " + str(child.parent) +
                                    " when it should be " + str(element))
                pending.append(child)

    # Walk this element and all children, calling a function on them
    def walk(self, func):
        self.inspect(lambda element: func(element) or True)

    # Walk this element and its children in depth-first order, calling func on each element before its children
    # The children of an element are only visited if func returns True for it
    def inspect(self, func):
        pending = [self]
        while len(pending) > 0:
            element = pending.pop()
            if func(element):
                pending.extend(reversed(element.get_children()))

    # Recursively find all the children of this element (and this element itself) that match the type supplied,
    # and return them as a list
    def list_all_children_of_type(self, element_type):
        result = []

        def walker(element):
            if isinstance(element, element_type):
                result.append(element)

        self.walk(walker)

        return result

    # Get this element as (approximate) Gno source code
    def to_gno_string(self):
        return "<" + self.kind.name + ">"

    # Dump this element for debugging
    def dump(self, indent=0):
        print("".ljust(indent * 4) + str(self))
        for child_list in self.get_child_lists():
            for child in child_list:
                child.dump(indent + 1)

    def __str__(self):
        return self.kind.name
