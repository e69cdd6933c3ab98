from rich.pretty import pprint

from greedyflag import *

flags = FlagSet("lint", shell=True)
flags.mandatory(2)
flags.boolean("verbose", "v", usage="print every checked file")
flags.string("format", default="text", usage="report format")
flags.string_list("ext", "e", usage="file extensions to check")
flags.string_list("files", "f", usage="explicit files to check")


if __name__ == '__main__':
    pprint(invoke(flags))
    pprint(flags.lookup("ext"))
