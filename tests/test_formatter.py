from embedderer.xcode.formatter import format_xcode_project, quote
from embedderer.xcode.model import PBXBuildFile
from embedderer.xcode.parser import parse_project

from conftest import EMBED_PHASE_ID, FOO_FILE_REF_ID


def test_unchanged_project_is_written_back_verbatim(sample_text, sample_project):
    assert format_xcode_project(sample_project, "Sample") == sample_text


def test_quote():
    assert quote("Foo.framework") == "Foo.framework"
    assert quote("usr/lib/libz.tbd") == "usr/lib/libz.tbd"
    assert quote("") == '""'
    assert quote("<group>") == '"<group>"'
    assert quote("$(inherited)") == '"$(inherited)"'
    assert quote("com.apple.product-type.framework") == '"com.apple.product-type.framework"'
    assert quote('say "hi"\n') == '"say \\"hi\\"\\n"'


def test_new_build_file_is_annotated(sample_project):
    objects = sample_project.objects
    build_file = PBXBuildFile.create(
        "B" * 24,
        fileRef=FOO_FILE_REF_ID,
        settings={"ATTRIBUTES": ["CodeSignOnCopy", "RemoveHeadersOnCopy"]},
    )
    build_file.attach(objects)
    objects[EMBED_PHASE_ID].add("files", build_file)

    text = format_xcode_project(sample_project, "Sample")
    assert (
        f"\t\t{'B' * 24} /* Foo.framework in Embed Frameworks */ = "
        f"{{isa = PBXBuildFile; fileRef = {FOO_FILE_REF_ID} /* Foo.framework */; "
        "settings = {ATTRIBUTES = (CodeSignOnCopy, RemoveHeadersOnCopy, ); }; };\n"
    ) in text
    assert f"\t\t\t\t{'B' * 24} /* Foo.framework in Embed Frameworks */,\n" in text

    reparsed = parse_project(text)
    assert reparsed.objects["B" * 24].fields == build_file.fields


def test_detached_objects_are_not_written(sample_project):
    objects = sample_project.objects
    objects[EMBED_PHASE_ID].detach()
    text = format_xcode_project(sample_project)
    assert "PBXCopyFilesBuildPhase section" not in text


def test_top_level_keys_are_written_sorted():
    project = parse_project(
        "{ rootObject = P; objectVersion = 56; objects = { P = { isa = PBXProject; }; }; "
        "classes = { }; archiveVersion = 1; }"
    )
    text = format_xcode_project(project)
    positions = [
        text.index(f"\t{key} = ")
        for key in ("archiveVersion", "classes", "objectVersion", "objects", "rootObject")
    ]
    assert positions == sorted(positions)


def test_package_and_proxy_comments():
    project = parse_project(
        """{
        objects = {
            P = { isa = PBXProject; packageReferences = (R, L, ); mainGroup = G; };
            G = { isa = PBXGroup; children = (X, ); sourceTree = "<group>"; };
            X = { isa = PBXReferenceProxy; fileType = archive.ar; path = libFoo.a;
                remoteRef = C; sourceTree = BUILT_PRODUCTS_DIR; };
            C = { isa = PBXContainerItemProxy; containerPortal = P; proxyType = 2; };
            R = { isa = XCRemoteSwiftPackageReference;
                repositoryURL = "https://github.com/apple/swift-argument-parser.git"; };
            L = { isa = XCLocalSwiftPackageReference; relativePath = ../Local; };
            D = { isa = XCSwiftPackageProductDependency; package = R;
                productName = ArgumentParser; };
        };
        rootObject = P;
        }"""
    )
    text = format_xcode_project(project)
    assert '\t\tR /* XCRemoteSwiftPackageReference "swift-argument-parser" */ = {\n' in text
    assert '\t\tL /* XCLocalSwiftPackageReference "../Local" */ = {\n' in text
    assert "\t\tX /* libFoo.a */ = {\n" in text
    assert "\t\tC /* PBXContainerItemProxy */ = {\n" in text
    assert "\t\tD /* ArgumentParser */ = {\n" in text
    assert "\t\t\t\tX /* libFoo.a */,\n" in text
